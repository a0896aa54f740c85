"""Reading the list of changed paths produced by the CI checkout."""
from __future__ import annotations

from pathlib import Path
from typing import Iterable

from period_gate.domain.errors import EnvironmentFault
from period_gate.domain.models import Cadence

RENAME_ARROW = "=>"


def normalize_path(line: str) -> str:
    """Collapse rename notation to the new path.

    ``daily/{old.csv => new.csv}`` and ``daily/old.csv => daily/new.csv``
    both become ``daily/new.csv``.
    """
    line = line.strip()
    if RENAME_ARROW not in line:
        return line
    if "{" in line and "}" in line:
        head, rest = line.split("{", 1)
        inner, tail = rest.split("}", 1)
        new = inner.split(RENAME_ARROW, 1)[1].strip()
        return f"{head}{new}{tail}".replace("//", "/")
    return line.split(RENAME_ARROW, 1)[1].strip()


def read_changed_files(path: Path) -> list[str]:
    path = Path(path)
    if not path.exists():
        raise EnvironmentFault(f"changed_files.txt not found at {path.resolve()}", file=str(path))
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise EnvironmentFault(f"Unable to read changed_files.txt: {exc}", file=str(path)) from exc
    return [normalize_path(line) for line in text.splitlines() if line.strip()]


def cadence_of(path: str) -> Cadence | None:
    if "/" not in path:
        return None
    return Cadence.from_folder(path.split("/", 1)[0])


def group_by_cadence(paths: Iterable[str]) -> dict[Cadence, list[str]]:
    """Filenames per cadence folder; paths outside the four folders are dropped."""
    grouped: dict[Cadence, list[str]] = {}
    for path in paths:
        cadence = cadence_of(path)
        if cadence is None:
            continue
        grouped.setdefault(cadence, []).append(path.split("/", 1)[1])
    return grouped
