#!/usr/bin/env python3
"""Runs git commands inside a given working directory."""

from __future__ import annotations

import os
import subprocess
import sys
import threading
from contextlib import contextmanager
from typing import Iterator

from config import DEFAULT_GIT_EXECUTABLE
from errors import GitCommandError
from logging_utils import Logger

# The process working directory is shared by every thread
_CWD_LOCK = threading.Lock()


@contextmanager
def working_directory(path: str) -> Iterator[str]:
    """Change into ``path`` and always restore the previous directory."""
    with _CWD_LOCK:
        previous = os.getcwd()
        os.chdir(path)
        try:
            yield previous
        finally:
            os.chdir(previous)


class GitRunner:
    """Executes the git binary with stdin closed and stdout captured."""

    def __init__(self, executable: str = DEFAULT_GIT_EXECUTABLE) -> None:
        self.executable = executable

    def run(self, working_dir: str, *args: str) -> str:
        """Run ``git <args>`` inside ``working_dir`` and return its stdout.

        Raises GitCommandError on a non-zero exit, after writing the captured
        output to the console.
        """
        command = [self.executable, *args]
        env = os.environ.copy()
        env["GIT_TERMINAL_PROMPT"] = "0"

        sys.stdout.flush()
        try:
            with working_directory(working_dir):
                with subprocess.Popen(
                    command,
                    stdin=subprocess.PIPE,
                    stdout=subprocess.PIPE,
                    env=env,
                ) as process:
                    process.stdin.close()
                    output = process.stdout.read().decode("utf-8", errors="replace")
                    returncode = process.wait()
        except OSError as e:
            raise GitCommandError(command, None, reason=str(e)) from e

        if returncode != 0:
            Logger.raw(output)
            raise GitCommandError(command, returncode, output)

        return output
