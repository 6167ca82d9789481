#!/usr/bin/env python3
"""
gh-org-sync - Keep a local directory in sync with every repository of a
GitHub organization.

The tool walks the paginated organization listing API, then clones each
repository that is missing under the root path and runs `git pull origin`
in each one that is already there. A failing clone or pull is reported and
the run moves on; malformed API data or a failed listing stops the run.

Copyright (c) 2025 Michele Tavella <meeghele@proton.me>
Licensed under the MIT License. See LICENSE file for details.

Author: Michele Tavella <meeghele@proton.me>
License: MIT
"""

from __future__ import annotations

import sys
from typing import NoReturn

from argument_parser import parse_arguments
from sync_orchestrator import SyncOrchestrator

# Exit codes
EXIT_EXECUTION_ERROR = 1


def main() -> NoReturn:
    if __name__ != "__main__":
        sys.exit(EXIT_EXECUTION_ERROR)

    cfg = parse_arguments()
    orchestrator = SyncOrchestrator(cfg)
    sys.exit(orchestrator.run())


if __name__ == "__main__":
    main()
