#!/usr/bin/env python3
"""Diagnostic script to check the NEAR runner configuration of this checkout."""

from __future__ import annotations

import sys

from near_runner import BASE_DIR
from near_runner.diagnostics import main


if __name__ == "__main__":
    sys.exit(main(BASE_DIR))
