#!/usr/bin/env python3
"""Decides between clone and pull for each repository of the organization."""

from __future__ import annotations

import os

from errors import GitCommandError, UnexpectedPathError
from git_runner import GitRunner
from logging_utils import Logger
from models import ReconcileResult, RepositoryDescriptor, SyncOutcome
from utils import repo_dir_name

DEFAULT_REMOTE = "origin"


class RepoReconciler:
    """Brings one local checkout under ``root_path`` in line with its remote."""

    def __init__(self, root_path: str, runner: GitRunner, *, dry_run: bool = False) -> None:
        self.root_path = root_path
        self.runner = runner
        self.dry_run = dry_run

    def repo_dir(self, descriptor: RepositoryDescriptor) -> str:
        return os.path.join(self.root_path, repo_dir_name(descriptor.clone_url))

    def reconcile(
        self, index: int, total: int, descriptor: RepositoryDescriptor
    ) -> ReconcileResult:
        """Clone the repository if missing, pull it if present.

        Malformed clone URLs and non-directory obstructions raise fatal
        errors; a failing git command is reported in the returned result.
        """
        clone_url = descriptor.clone_url
        repo_dir = self.repo_dir(descriptor)

        if not os.path.lexists(repo_dir):
            operation, outcome = "clone", SyncOutcome.CLONED
            cwd, args = self.root_path, ("clone", clone_url)
        elif os.path.isdir(repo_dir):
            operation, outcome = "pull", SyncOutcome.PULLED
            cwd, args = repo_dir, ("pull", DEFAULT_REMOTE)
        else:
            raise UnexpectedPathError(f"expected directory at {repo_dir}")

        if self.dry_run:
            Logger.info(f"[{index}/{total}] would {operation}: {repo_dir} from {clone_url}")
            return ReconcileResult(SyncOutcome.PLANNED, repo_dir, clone_url)

        Logger.info(f"[{index}/{total}] {operation}: {repo_dir} from {clone_url}")
        try:
            self.runner.run(cwd, *args)
        except GitCommandError as e:
            Logger.error(f"[{index}/{total}] {operation} failed for {repo_dir}: {e}")
            return ReconcileResult(SyncOutcome.FAILED, repo_dir, clone_url, str(e))

        Logger.success(f"[{index}/{total}] {outcome.value}: {repo_dir}")
        return ReconcileResult(outcome, repo_dir, clone_url)
