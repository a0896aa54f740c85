"""Commit gate over the cadence folders of a working tree."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from period_gate.application.dto import FailurePolicy, FolderBatch
from period_gate.application.use_cases import AdmissionContext, AdmissionOrchestrator
from period_gate.domain.models import Cadence
from period_gate.domain.repositories import CommittedArchive
from period_gate.domain.results import AdmissionReport
from period_gate.infrastructure.archive.local_folder import LocalFolderRepository
from period_gate.infrastructure.tracker.serial_tracker import SerialTracker


@dataclass(slots=True)
class GateContext:
    folders: LocalFolderRepository
    archive: CommittedArchive
    today: date
    policy: FailurePolicy = FailurePolicy.FAIL_FAST
    tracker: SerialTracker | None = None


@dataclass(slots=True)
class GateFoldersUseCase:
    context: GateContext

    def execute(self) -> AdmissionReport:
        ctx = self.context
        cadences = list(Cadence)
        if ctx.tracker is not None:
            baselines, environment_issues = ctx.tracker.load(cadences)
        else:
            baselines, environment_issues = {}, []

        batches = [
            FolderBatch(cadence=cadence, files=tuple(ctx.folders.list_files(cadence)), baseline=baselines.get(cadence, 0))
            for cadence in cadences
        ]
        # nothing is renamed when a baseline could not be read
        renamer = ctx.folders if not environment_issues else None
        orchestrator = AdmissionOrchestrator(
            AdmissionContext(archive=ctx.archive, today=ctx.today, policy=ctx.policy, renamer=renamer)
        )
        return orchestrator.run(batches, environment_issues)
