"""Admission gate for serially-numbered period archives."""
from period_gate.application.dto import FailurePolicy, FolderBatch
from period_gate.application.use_cases import AdmissionContext, AdmissionOrchestrator
from period_gate.domain.models import Cadence, PeriodRecord
from period_gate.infrastructure.archive.committed import StaticCommittedArchive

__all__ = [
    "AdmissionContext",
    "AdmissionOrchestrator",
    "Cadence",
    "FailurePolicy",
    "FolderBatch",
    "PeriodRecord",
    "StaticCommittedArchive",
]
