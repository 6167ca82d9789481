#!/usr/bin/env python3
"""Exception hierarchy for gh-org-sync.

Fatal errors stop the whole run and carry the process exit code.
GitCommandError is scoped to a single repository and never stops the batch.
"""

from __future__ import annotations

from typing import Optional, Sequence

# Exit codes
EXIT_EXECUTION_ERROR = 1
EXIT_GITHUB_ERROR = 31
EXIT_MALFORMED_DATA = 32
EXIT_FILESYSTEM_ERROR = 33
EXIT_AUTH_ERROR = 40


class SyncError(Exception):
    """Base class for all gh-org-sync errors."""


class FatalSyncError(SyncError):
    """Error that aborts the whole run."""

    exit_code = EXIT_EXECUTION_ERROR


class GitHubAPIError(FatalSyncError):
    """Listing request failed or returned something we cannot use."""

    exit_code = EXIT_GITHUB_ERROR


class GitHubAuthError(GitHubAPIError):
    exit_code = EXIT_AUTH_ERROR


class PaginationCycleError(GitHubAPIError):
    """The API handed back a cursor that was already followed."""


class MalformedRepositoryError(FatalSyncError):
    """Repository descriptor from the API is unusable."""

    exit_code = EXIT_MALFORMED_DATA


class UnexpectedPathError(FatalSyncError):
    """Something other than a directory sits where a checkout should be."""

    exit_code = EXIT_FILESYSTEM_ERROR


class GitCommandError(SyncError):
    """A git invocation failed for one repository."""

    def __init__(
        self,
        command: Sequence[str],
        returncode: Optional[int],
        output: str = "",
        reason: Optional[str] = None,
    ) -> None:
        self.command = tuple(command)
        self.returncode = returncode
        self.output = output
        self.reason = reason
        super().__init__(self._describe())

    def _describe(self) -> str:
        cmd = " ".join(self.command)
        if self.returncode is None:
            return f"{cmd} could not run: {self.reason or 'unknown error'}"
        return f"{cmd} failed (exit {self.returncode})"
