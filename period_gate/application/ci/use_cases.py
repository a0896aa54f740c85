"""CI check over the list of paths changed by a pull request."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from pathlib import Path

import structlog

from period_gate.application.dto import FailurePolicy, FolderBatch
from period_gate.application.use_cases import AdmissionContext, AdmissionOrchestrator
from period_gate.domain.errors import AdmissionIssue, EnvironmentFault
from period_gate.domain.models import Cadence
from period_gate.domain.repositories import CommittedArchive
from period_gate.domain.results import AdmissionReport
from period_gate.infrastructure.changes.changed_files import group_by_cadence, read_changed_files
from period_gate.infrastructure.tracker.serial_tracker import SerialTracker

logger = structlog.get_logger(__name__)


@dataclass(slots=True)
class ChangedFilesContext:
    tracker: SerialTracker
    archive: CommittedArchive
    today: date
    policy: FailurePolicy = FailurePolicy.ACCUMULATE


class ValidateChangedFilesUseCase:
    def __init__(self, context: ChangedFilesContext) -> None:
        self._context = context

    def execute(self, changed_files: Path) -> AdmissionReport:
        ctx = self._context
        environment_issues: list[AdmissionIssue] = []
        try:
            paths = read_changed_files(changed_files)
        except EnvironmentFault as exc:
            environment_issues.append(exc.to_issue())
            paths = []

        grouped = group_by_cadence(paths)
        cadences = [cadence for cadence in Cadence if cadence in grouped]
        logger.info("changed_files_read", total=len(paths), folders=[c.value for c in cadences])

        baselines, tracker_issues = ctx.tracker.load(cadences)
        environment_issues.extend(tracker_issues)

        batches = [
            FolderBatch(
                cadence=cadence,
                files=tuple(grouped[cadence]),
                baseline=baselines[cadence],
                source_folder=cadence.value,
            )
            for cadence in cadences
        ]
        orchestrator = AdmissionOrchestrator(
            AdmissionContext(archive=ctx.archive, today=ctx.today, policy=ctx.policy)
        )
        return orchestrator.run(batches, environment_issues)
