#!/usr/bin/env python3
"""Command line argument parsing and configuration building."""

from __future__ import annotations

import argparse
import os
import sys
from typing import List, Optional, Tuple

from config import (DEFAULT_API_URL, DEFAULT_GIT_EXECUTABLE, Config,
                    GitHubConfig, SyncBehaviorConfig)
from errors import EXIT_AUTH_ERROR
from logging_utils import Logger
from security import SecurityValidator

# Exit codes
EXIT_MISSING_ARGUMENTS = 2


def _create_argument_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        description="Clone or pull every repository of a GitHub organization",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s --root-path ~/src/acme --github-org acme --username me --password $TOKEN
  %(prog)s --rootPath ~/src/acme --githubOrg acme --dry-run
  %(prog)s --root-path ~/src/acme --github-org acme --debug
  %(prog)s --api-url https://github.company.com/api/v3 \\
           --root-path /srv/mirror --github-org team
        """,
    )
    return parser


def _add_github_arguments(parser: argparse.ArgumentParser) -> None:
    """Add GitHub-related arguments to parser."""
    parser.add_argument(
        "--api-url",
        dest="api_url",
        default=DEFAULT_API_URL,
        help=f"Base URL of the GitHub API (default: {DEFAULT_API_URL})",
    )
    parser.add_argument(
        "--github-org",
        "--githubOrg",
        dest="github_org",
        help="GitHub organization whose repositories are synced",
    )
    parser.add_argument(
        "--username",
        dest="username",
        help="Username for basic auth (or set GITHUB_USERNAME env var)",
    )
    parser.add_argument(
        "--password",
        dest="password",
        help="Password or token for basic auth "
        "(or set GITHUB_PASSWORD / GITHUB_TOKEN env var)",
    )


def _add_behavior_arguments(parser: argparse.ArgumentParser) -> None:
    """Add behavior and configuration arguments to parser."""
    parser.add_argument(
        "--root-path",
        "--rootPath",
        dest="root_path",
        default=os.getenv("GH_SYNC_ROOT"),
        help="Root directory containing one checkout per repository "
        "(or set GH_SYNC_ROOT env var)",
    )
    parser.add_argument(
        "-d",
        "--dry-run",
        action="store_true",
        dest="dry_run",
        help="List clone/pull actions without running git",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        dest="debug",
        help="Print every raw listing response",
    )
    parser.add_argument(
        "--git-executable",
        dest="git_executable",
        default=DEFAULT_GIT_EXECUTABLE,
        help=f"git binary to invoke (default: {DEFAULT_GIT_EXECUTABLE})",
    )


def _missing_error(message: str) -> None:
    Logger.error(f"error: {message}")
    sys.exit(EXIT_MISSING_ARGUMENTS)


def _validate_parsed_arguments(args) -> Tuple[str, str, str]:
    """Validate required arguments and sanitize them for security."""
    if not args.root_path:
        _missing_error("root path must be specified (use --root-path or GH_SYNC_ROOT)")
    if not args.github_org:
        _missing_error("github organization must be specified (use --github-org)")

    try:
        validated_api_url = SecurityValidator.validate_url(args.api_url, ["https"])
        validated_org = SecurityValidator.validate_org_name(args.github_org)
        validated_root = SecurityValidator.validate_file_path(args.root_path)

        if not os.path.isdir(validated_root):
            raise ValueError(f"root path is not an existing directory: {validated_root}")

        Logger.security_event(
            "CONFIG_VALIDATION", "successfully validated all configuration inputs"
        )
    except ValueError as e:
        Logger.security_event(
            "CONFIG_VALIDATION_FAILED", f"configuration validation failed: {e}"
        )
        Logger.error(f"configuration validation error: {e}")
        sys.exit(EXIT_MISSING_ARGUMENTS)

    return validated_api_url, validated_org, validated_root


def _get_and_validate_credentials(args) -> Tuple[str, str]:
    """Resolve the basic-auth pair from flags or environment."""
    username = args.username or os.getenv("GITHUB_USERNAME")
    password = (
        args.password or os.getenv("GITHUB_PASSWORD") or os.getenv("GITHUB_TOKEN")
    )
    if not username:
        Logger.error("error: username must be specified (use --username or GITHUB_USERNAME)")
        sys.exit(EXIT_AUTH_ERROR)
    if not password:
        Logger.error(
            "error: password must be specified "
            "(use --password, or set GITHUB_PASSWORD/GITHUB_TOKEN)"
        )
        sys.exit(EXIT_AUTH_ERROR)

    try:
        validated_username = SecurityValidator.validate_username(username)
    except ValueError as e:
        Logger.security_event(
            "USERNAME_VALIDATION_FAILED", f"username validation failed: {e}"
        )
        Logger.error(f"username validation error: {e}")
        sys.exit(EXIT_AUTH_ERROR)

    return validated_username, password


def parse_arguments(argv: Optional[List[str]] = None) -> Config:
    """Parse command line arguments and return configuration object."""
    parser = _create_argument_parser()
    _add_github_arguments(parser)
    _add_behavior_arguments(parser)

    args = parser.parse_args(argv)

    validated_api_url, validated_org, validated_root = _validate_parsed_arguments(args)
    username, password = _get_and_validate_credentials(args)

    return Config(
        github=GitHubConfig(
            api_url=validated_api_url,
            username=username,
            password=password,
            org=validated_org,
        ),
        behavior=SyncBehaviorConfig(
            root_path=validated_root,
            debug=args.debug,
            dry_run=args.dry_run,
            git_executable=args.git_executable,
        ),
    )
