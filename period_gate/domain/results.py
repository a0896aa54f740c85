"""Domain-level results for folder admission."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterable, Sequence

from .errors import AdmissionIssue
from .models import Cadence, PeriodRecord


@dataclass(frozen=True)
class FolderResult:
    cadence: Cadence
    records: Sequence[PeriodRecord] = field(default_factory=tuple)
    issues: Sequence[AdmissionIssue] = field(default_factory=tuple)
    renamed: Sequence[tuple[str, str]] = field(default_factory=tuple)
    skipped: Sequence[str] = field(default_factory=tuple)

    @property
    def passed(self) -> bool:
        return not self.issues

    @property
    def reason(self) -> str | None:
        return self.issues[0].message if self.issues else None

    @property
    def admitted(self) -> list[PeriodRecord]:
        return [r for r in self.records if r.status == "admitted"]

    @property
    def rejected(self) -> list[PeriodRecord]:
        return [r for r in self.records if r.status == "rejected"]


@dataclass(frozen=True)
class AdmissionSummary:
    folders: int
    failed_folders: int
    admitted: int
    rejected: int
    renamed: int
    issues: int
    generated_at: datetime


@dataclass(frozen=True)
class AdmissionReport:
    folders: Sequence[FolderResult] = field(default_factory=tuple)
    environment_issues: Sequence[AdmissionIssue] = field(default_factory=tuple)
    generated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def passed(self) -> bool:
        return not self.has_issues()

    def has_issues(self) -> bool:
        return bool(self.environment_issues) or any(not folder.passed for folder in self.folders)

    def iter_all_issues(self) -> Iterable[AdmissionIssue]:
        yield from self.environment_issues
        for folder in self.folders:
            yield from folder.issues

    def iter_records(self) -> Iterable[PeriodRecord]:
        for folder in self.folders:
            yield from folder.records

    @property
    def summary(self) -> AdmissionSummary:
        return AdmissionSummary(
            folders=len(self.folders),
            failed_folders=len([f for f in self.folders if not f.passed]),
            admitted=sum(len(f.admitted) for f in self.folders),
            rejected=sum(len(f.rejected) for f in self.folders),
            renamed=sum(len(f.renamed) for f in self.folders),
            issues=len(list(self.iter_all_issues())),
            generated_at=self.generated_at,
        )
