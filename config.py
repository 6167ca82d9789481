#!/usr/bin/env python3
"""Configuration dataclasses for gh-org-sync."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_GIT_EXECUTABLE = "git"
LISTING_PAGE_SIZE = 200


@dataclass
class GitHubConfig:
    """GitHub listing API configuration."""
    api_url: str
    username: str
    password: str
    org: str


@dataclass
class SyncBehaviorConfig:
    """Local checkout behavior configuration."""
    root_path: str
    debug: bool = False
    dry_run: bool = False
    git_executable: str = DEFAULT_GIT_EXECUTABLE


@dataclass
class Config:
    """Main configuration for an organization sync."""
    github: GitHubConfig
    behavior: SyncBehaviorConfig
