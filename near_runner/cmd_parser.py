from __future__ import annotations

from pathlib import Path
from typing import List, Tuple

SOURCE_PREFIXES = ("source ", ". ")


def classify_command(command: str) -> Tuple[str, str]:
    """Split env-file sourcing off from commands meant for the shell.

    ``source neardev/dev-account.env`` and ``. neardev/dev-account.env`` both
    become ``("source", "neardev/dev-account.env")``; anything else is a
    ``("command", ...)`` entry.
    """

    for prefix in SOURCE_PREFIXES:
        if command.startswith(prefix):
            return "source", command[len(prefix) :].strip().strip("\"'")
    return "command", command


def parse_command_file(path: Path) -> List[Tuple[str, str]]:
    """Return a list of (entry_type, content) pairs from a shell-style command file.

    ``entry_type`` is ``"comment"``, ``"source"`` or ``"command"``. Lines
    continued with ``\\`` are joined into one command, blank lines are
    dropped and a leading shebang is ignored.
    """

    entries: List[Tuple[str, str]] = []
    pending: List[str] = []

    lines = path.read_text().splitlines()
    if lines and lines[0].startswith("#!"):
        lines = lines[1:]

    for raw_line in lines:
        text = raw_line.strip()

        if not pending:
            if not text:
                continue
            if text.startswith("#"):
                entries.append(("comment", text.lstrip("#").strip()))
                continue

        if text.endswith("\\"):
            pending.append(text[:-1].strip())
            continue

        pending.append(text)
        command = " ".join(part for part in pending if part)
        pending = []
        if command:
            entries.append(classify_command(command))

    if pending:
        command = " ".join(part for part in pending if part)
        if command:
            entries.append(classify_command(command))

    return entries
