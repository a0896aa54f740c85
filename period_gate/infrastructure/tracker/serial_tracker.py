"""Tracker files holding the last assigned serial of each cadence."""
from __future__ import annotations

from pathlib import Path
from typing import Iterable

import structlog

from period_gate.domain.errors import AdmissionIssue, EnvironmentFault
from period_gate.domain.models import Cadence

logger = structlog.get_logger(__name__)

DEFAULT_TEMPLATE = "serial_{cadence}.txt"


class SerialTracker:
    def __init__(self, directory: Path, template: str = DEFAULT_TEMPLATE) -> None:
        self._directory = Path(directory)
        self._template = template

    def path_for(self, cadence: Cadence) -> Path:
        return self._directory / self._template.format(cadence=cadence.value)

    def read(self, cadence: Cadence) -> int:
        path = self.path_for(cadence)
        if not path.exists():
            raise EnvironmentFault(f"Tracker file '{path}' not found.", file=str(path))
        try:
            lines = path.read_text(encoding="utf-8").splitlines()
            first = lines[0].strip() if lines else ""
            return int(first) if first else 0
        except (OSError, ValueError) as exc:
            raise EnvironmentFault(f"Cannot read tracker '{path}': {exc}", file=str(path)) from exc

    def load(self, cadences: Iterable[Cadence]) -> tuple[dict[Cadence, int], list[AdmissionIssue]]:
        """Baselines per cadence; unreadable trackers fall back to 0 and are reported."""
        baselines: dict[Cadence, int] = {}
        issues: list[AdmissionIssue] = []
        for cadence in cadences:
            try:
                baselines[cadence] = self.read(cadence)
            except EnvironmentFault as exc:
                logger.warning("tracker_unreadable", folder=cadence.value, reason=exc.message)
                baselines[cadence] = 0
                issues.append(exc.to_issue())
        return baselines, issues
