#!/usr/bin/env python3
"""Data model shared by the listing and reconciliation stages."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, List, Mapping, Optional

from errors import MalformedRepositoryError


class SyncOutcome(Enum):
    """Result of reconciling one repository."""
    CLONED = "cloned"
    PULLED = "pulled"
    FAILED = "failed"
    PLANNED = "planned"


@dataclass(frozen=True)
class RepositoryDescriptor:
    """One repository as returned by the listing API.

    Only ``clone_url`` is required; the rest of the decoded object is kept
    read-only in ``fields``.
    """
    clone_url: str
    name: Optional[str] = None
    fields: Mapping[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_api(cls, data: Any) -> "RepositoryDescriptor":
        if not isinstance(data, dict):
            raise MalformedRepositoryError(
                f"repository entry is not a JSON object: {type(data).__name__}"
            )
        clone_url = data.get("clone_url")
        if not isinstance(clone_url, str):
            raise MalformedRepositoryError(
                f"missing field 'clone_url' in repository {data.get('full_name', '?')}"
            )
        name = data.get("name")
        return cls(
            clone_url=clone_url,
            name=name if isinstance(name, str) else None,
            fields=MappingProxyType(dict(data)),
        )


@dataclass(frozen=True)
class Page:
    """One page of the repository listing."""
    next_url: Optional[str]
    repositories: List[RepositoryDescriptor]


@dataclass
class ReconcileResult:
    outcome: SyncOutcome
    repo_dir: str
    clone_url: str
    error: Optional[str] = None
