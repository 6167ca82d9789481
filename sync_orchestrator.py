#!/usr/bin/env python3
"""Main orchestrator for synchronizing a GitHub organization into a local tree."""

from __future__ import annotations

from typing import Dict, List, Optional

from config import Config
from errors import EXIT_EXECUTION_ERROR, FatalSyncError
from git_runner import GitRunner
from github_source import GitHubSource
from logging_utils import Logger
from models import ReconcileResult, SyncOutcome
from repo_reconciler import RepoReconciler

# Exit codes
EXIT_SUCCESS = 0


class SyncOrchestrator:
    def __init__(
        self,
        cfg: Config,
        source: Optional[GitHubSource] = None,
        reconciler: Optional[RepoReconciler] = None,
    ) -> None:
        self.cfg = cfg
        self.source = source or GitHubSource(
            cfg.github.api_url,
            cfg.github.username,
            cfg.github.password,
            debug=cfg.behavior.debug,
        )
        self.reconciler = reconciler or RepoReconciler(
            cfg.behavior.root_path,
            GitRunner(cfg.behavior.git_executable),
            dry_run=cfg.behavior.dry_run,
        )
        self.results: List[ReconcileResult] = []

    def run(self) -> int:
        try:
            repositories = self.source.list_repositories(self.cfg.github.org)

            total = len(repositories)
            Logger.info(f"processing {total} repos for org {self.cfg.github.org}")
            for idx, descriptor in enumerate(repositories, start=1):
                self.results.append(self.reconciler.reconcile(idx, total, descriptor))

            self._report()
            return EXIT_SUCCESS
        except FatalSyncError as e:
            Logger.error(f"fatal: {e}")
            return e.exit_code
        except Exception as e:
            Logger.error(f"unexpected error: {e}")
            return EXIT_EXECUTION_ERROR

    def _report(self) -> None:
        counts: Dict[SyncOutcome, int] = {outcome: 0 for outcome in SyncOutcome}
        for result in self.results:
            counts[result.outcome] += 1

        if self.cfg.behavior.dry_run:
            Logger.info(f"dry-run completed: {counts[SyncOutcome.PLANNED]} planned")
            return

        Logger.info(
            f"sync completed: {counts[SyncOutcome.CLONED]} cloned, "
            f"{counts[SyncOutcome.PULLED]} pulled, "
            f"{counts[SyncOutcome.FAILED]} failed"
        )
        for result in self.results:
            if result.outcome is SyncOutcome.FAILED:
                Logger.warn(f"not synced: {result.repo_dir} ({result.error})")
