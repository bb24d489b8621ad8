#!/usr/bin/env python3
"""Thin wrapper to run the NFT contract commands from this checkout.

Parsing, sequencing and execution live in the ``near_runner`` package; see
``near_runner.cli`` for the available options. The checkout itself is used as
the project directory, so ``neardev/`` and the results log sit beside it.
"""

from __future__ import annotations

import sys

from near_runner import BASE_DIR
from near_runner.cli import main


if __name__ == "__main__":
    sys.exit(main(["--project-dir", str(BASE_DIR), *sys.argv[1:]]))
