"""Tests for RepoReconciler clone-vs-pull decisions."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from errors import GitCommandError, MalformedRepositoryError, UnexpectedPathError
from git_runner import GitRunner
from models import RepositoryDescriptor, SyncOutcome
from repo_reconciler import RepoReconciler


def _make_reconciler(tmp_path: Path, dry_run: bool = False):
    runner = MagicMock(spec=GitRunner)
    return RepoReconciler(str(tmp_path), runner, dry_run=dry_run), runner


def _descriptor(url: str) -> RepositoryDescriptor:
    return RepositoryDescriptor(clone_url=url)


def test_missing_directory_is_cloned_from_root(tmp_path: Path) -> None:
    reconciler, runner = _make_reconciler(tmp_path)

    result = reconciler.reconcile(1, 1, _descriptor('https://example.com/acme/widgets.git'))

    runner.run.assert_called_once_with(
        str(tmp_path), 'clone', 'https://example.com/acme/widgets.git'
    )
    assert result.outcome is SyncOutcome.CLONED
    assert result.repo_dir == str(tmp_path / 'widgets')


def test_existing_directory_is_pulled_in_place(tmp_path: Path) -> None:
    (tmp_path / 'widgets').mkdir()
    reconciler, runner = _make_reconciler(tmp_path)

    result = reconciler.reconcile(1, 1, _descriptor('https://example.com/acme/widgets.git'))

    runner.run.assert_called_once_with(str(tmp_path / 'widgets'), 'pull', 'origin')
    assert result.outcome is SyncOutcome.PULLED


def test_file_in_the_way_is_fatal(tmp_path: Path) -> None:
    (tmp_path / 'widgets').write_text('not a checkout')
    reconciler, runner = _make_reconciler(tmp_path)

    with pytest.raises(UnexpectedPathError):
        reconciler.reconcile(1, 1, _descriptor('https://example.com/acme/widgets.git'))
    runner.run.assert_not_called()


@pytest.mark.parametrize('url', [
    'https://example.com/acme/widgets',
    'widgets.git',
    'https://example.com/acme/.git',
    'https://example.com/acme/...git',
])
def test_malformed_url_is_fatal_before_git_runs(tmp_path: Path, url: str) -> None:
    reconciler, runner = _make_reconciler(tmp_path)

    with pytest.raises(MalformedRepositoryError):
        reconciler.reconcile(1, 1, _descriptor(url))
    runner.run.assert_not_called()


def test_git_failure_is_reported_not_raised(tmp_path: Path) -> None:
    reconciler, runner = _make_reconciler(tmp_path)
    runner.run.side_effect = GitCommandError(['git', 'clone', 'x'], 128, 'fatal: not found')

    result = reconciler.reconcile(1, 2, _descriptor('https://example.com/acme/gone.git'))

    assert result.outcome is SyncOutcome.FAILED
    assert 'exit 128' in result.error


def test_dry_run_plans_without_running_git(tmp_path: Path) -> None:
    (tmp_path / 'pulled').mkdir()
    reconciler, runner = _make_reconciler(tmp_path, dry_run=True)

    cloned = reconciler.reconcile(1, 2, _descriptor('https://example.com/acme/fresh.git'))
    pulled = reconciler.reconcile(2, 2, _descriptor('https://example.com/acme/pulled.git'))

    assert cloned.outcome is SyncOutcome.PLANNED
    assert pulled.outcome is SyncOutcome.PLANNED
    runner.run.assert_not_called()
