"""Tests for GitRunner process handling and working directory restoration.

The Python interpreter stands in for git so the tests need no repository.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from errors import GitCommandError
from git_runner import GitRunner, working_directory


def test_working_directory_restores_after_exception(tmp_path: Path) -> None:
    before = os.getcwd()

    with pytest.raises(RuntimeError):
        with working_directory(str(tmp_path)):
            assert os.path.samefile(os.getcwd(), tmp_path)
            raise RuntimeError('boom')

    assert os.getcwd() == before


def test_run_captures_stdout_in_working_dir(tmp_path: Path) -> None:
    before = os.getcwd()
    runner = GitRunner(sys.executable)

    output = runner.run(str(tmp_path), '-c', 'import os; print(os.getcwd())')

    assert os.path.samefile(output.strip(), tmp_path)
    assert os.getcwd() == before


def test_run_closes_stdin(tmp_path: Path) -> None:
    runner = GitRunner(sys.executable)

    output = runner.run(str(tmp_path), '-c', 'import sys; print(repr(sys.stdin.read()))')

    assert output.strip() == "''"


def test_run_disables_terminal_prompt(tmp_path: Path) -> None:
    runner = GitRunner(sys.executable)

    output = runner.run(
        str(tmp_path), '-c', 'import os; print(os.environ["GIT_TERMINAL_PROMPT"])'
    )

    assert output.strip() == '0'


def test_run_nonzero_exit_raises_and_restores_cwd(tmp_path: Path, capsys) -> None:
    before = os.getcwd()
    runner = GitRunner(sys.executable)

    with pytest.raises(GitCommandError) as excinfo:
        runner.run(str(tmp_path), '-c', 'print("remote hung up"); raise SystemExit(3)')

    assert excinfo.value.returncode == 3
    assert 'remote hung up' in excinfo.value.output
    assert 'remote hung up' in capsys.readouterr().out
    assert os.getcwd() == before


def test_run_large_output_does_not_deadlock(tmp_path: Path) -> None:
    runner = GitRunner(sys.executable)

    output = runner.run(str(tmp_path), '-c', 'print("x" * 1000000)')

    assert len(output.strip()) == 1000000


def test_run_missing_working_dir_is_command_error(tmp_path: Path) -> None:
    before = os.getcwd()
    runner = GitRunner(sys.executable)

    with pytest.raises(GitCommandError) as excinfo:
        runner.run(str(tmp_path / 'missing'), '--version')

    assert excinfo.value.returncode is None
    assert os.getcwd() == before


def test_run_missing_executable_is_command_error(tmp_path: Path) -> None:
    runner = GitRunner(str(tmp_path / 'no-such-git'))

    with pytest.raises(GitCommandError, match='could not run'):
        runner.run(str(tmp_path), 'status')


def test_run_flushes_stdout_before_spawning(tmp_path: Path, monkeypatch) -> None:
    """Log lines written before git starts must not trail git's own stderr."""
    stdout = MagicMock()
    monkeypatch.setattr(sys, 'stdout', stdout)
    runner = GitRunner(sys.executable)

    with patch('git_runner.subprocess.Popen', side_effect=OSError('no spawn')):
        with pytest.raises(GitCommandError):
            runner.run(str(tmp_path), '--version')

    stdout.flush.assert_called()
