"""Application services orchestrating folder admission."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, Sequence

import structlog

from period_gate.application.dto import FailurePolicy, FolderBatch
from period_gate.domain.calendar_rules import CalendarRuleValidator, is_weekend
from period_gate.domain.duplicates import DuplicatePeriodDetector
from period_gate.domain.errors import (
    AdmissionHalted,
    AdmissionIssue,
    EnvironmentFault,
    IssueKind,
    ParseError,
    RenameError,
)
from period_gate.domain.models import Cadence, PeriodRecord, full_month_name, unhandled_cadence
from period_gate.domain.naming import CanonicalNameBuilder
from period_gate.domain.parser import FileNameParser
from period_gate.domain.repositories import CommittedArchive, FolderRenamer
from period_gate.domain.results import AdmissionReport, FolderResult
from period_gate.domain.sequencer import SerialSequencer, assignment_order, highest

logger = structlog.get_logger(__name__)


@dataclass(slots=True)
class AdmissionContext:
    archive: CommittedArchive
    today: date
    policy: FailurePolicy = FailurePolicy.FAIL_FAST
    renamer: FolderRenamer | None = None
    parser: FileNameParser = field(default_factory=FileNameParser)
    calendar: CalendarRuleValidator = field(default_factory=CalendarRuleValidator)
    sequencer: SerialSequencer = field(default_factory=SerialSequencer)
    detector: DuplicatePeriodDetector = field(default_factory=DuplicatePeriodDetector)
    builder: CanonicalNameBuilder = field(default_factory=CanonicalNameBuilder)


class _IssueLog:
    def __init__(self, policy: FailurePolicy) -> None:
        self._policy = policy
        self.issues: list[AdmissionIssue] = []

    def report(self, issue: AdmissionIssue, record: PeriodRecord | None = None) -> None:
        if record is not None:
            record.reject(issue.message)
        self.issues.append(issue)
        logger.debug("issue_reported", kind=issue.kind.value, file=issue.file, message=issue.message)
        if self._policy is FailurePolicy.FAIL_FAST:
            raise AdmissionHalted(issue)


def stamp_holdings(record: PeriodRecord, today: date) -> None:
    """Give the holdings snapshot the period fields of the processing date."""
    match record.cadence:
        case Cadence.DAILY:
            record.period_number = today.day
        case Cadence.WEEKLY:
            # 7-day blocks from the 1st, not the Monday-based weeks of the calendar rules
            record.period_number = (today.day - 1) // 7 + 1
        case Cadence.MONTHLY:
            record.period_number = today.month
        case Cadence.YEARLY:
            record.period_number = 1
        case _:
            unhandled_cadence(record.cadence)
    record.year = today.year
    record.month_name = full_month_name(today.month)


class _FolderRun:
    """State of one folder evaluation; nothing here outlives ``admit_folder``."""

    def __init__(self, context: AdmissionContext, batch: FolderBatch, log: _IssueLog) -> None:
        self._ctx = context
        self._batch = batch
        self._log = log
        self._folder = batch.cadence.value
        self.records: list[PeriodRecord] = []
        self.skipped: list[str] = []
        self.rename_plan: list[PeriodRecord] = []
        self.pool: list[PeriodRecord] = []

    def execute(self) -> None:
        ctx = self._ctx
        cadence = self._batch.cadence

        try:
            blocked = ctx.archive.has_open_change_request(cadence)
            committed_names = list(ctx.archive.list_files(cadence))
        except EnvironmentFault as exc:
            self._log.report(exc.to_issue())
            return
        if blocked:
            self._log.report(
                AdmissionIssue(IssueKind.FOLDER, f"Open change request already exists for folder '{self._folder}'.")
            )
            return

        self.pool.extend(self._committed_records(committed_names))
        committed_high = highest(self.pool)
        committed = set(committed_names)

        for name in self._batch.files:
            try:
                record = ctx.parser.parse(name, cadence, self._batch.source_path(name))
            except ParseError as exc:
                self._log.report(exc.to_issue())
                continue
            if name in committed:
                self.skipped.append(name)
                continue
            self.records.append(record)

        holdings, missing, ordinary = self._partition()
        if holdings is not None and is_weekend(ctx.today):
            self._log.report(
                AdmissionIssue(IssueKind.FOLDER, f"Weekend file upload in folder '{self._folder}'.", holdings.label),
                holdings,
            )
            holdings = None
        if holdings is not None:
            stamp_holdings(holdings, ctx.today)

        baseline = max(self._batch.baseline, highest(self.pool), highest(ordinary))
        last_serial = self._admit_missing(missing, baseline)
        self._admit_ordinary(ordinary, max(self._batch.baseline, committed_high))
        if holdings is not None:
            self._admit_holdings(holdings, max(last_serial, highest(self.pool)))

    def _committed_records(self, names: Sequence[str]) -> list[PeriodRecord]:
        parsed: list[PeriodRecord] = []
        for name in names:
            try:
                record = self._ctx.parser.parse(name, self._batch.cadence)
            except ParseError:
                logger.debug("committed_file_unparsable", folder=self._folder, file=name)
                continue
            if not record.is_holdings:
                record.final_name = name
                parsed.append(record)
        return parsed

    def _partition(self) -> tuple[PeriodRecord | None, list[PeriodRecord], list[PeriodRecord]]:
        holdings: PeriodRecord | None = None
        missing: list[PeriodRecord] = []
        ordinary: list[PeriodRecord] = []
        for record in self.records:
            if record.is_holdings:
                if holdings is not None:
                    self._log.report(
                        AdmissionIssue(IssueKind.FOLDER, f"Multiple holdings.csv in folder '{self._folder}'.", record.label),
                        record,
                    )
                    continue
                holdings = record
            elif record.is_missing_backfill:
                missing.append(record)
            else:
                ordinary.append(record)
        return holdings, missing, ordinary

    def _admit_missing(self, missing: Sequence[PeriodRecord], baseline: int) -> int:
        ctx = self._ctx
        last_serial = baseline
        for record in assignment_order(missing):
            if ctx.detector.check(record, self.pool):
                self._duplicate_period(record, "missing file")
                continue
            if not self._passes_calendar(record):
                continue
            last_serial = ctx.sequencer.assign([record], last_serial).last_serial
            if ctx.detector.name_conflict(record, self.pool):
                self._duplicate_name(record, "missing file")
                record.serial = None
                last_serial -= 1
                continue
            self._admit(record, ctx.builder.build(record), rename=True)
        return last_serial

    def _admit_ordinary(self, ordinary: Sequence[PeriodRecord], verify_baseline: int) -> None:
        ctx = self._ctx
        for record in sorted(ordinary, key=lambda r: r.serial):
            if not self._passes_calendar(record):
                continue
            if ctx.detector.check(record, self.pool):
                self._duplicate_period(record, "file")
                continue
            if ctx.detector.name_conflict(record, self.pool):
                self._duplicate_name(record, "file")
                continue
            self._admit(record, record.original_name, rename=False)

        result = ctx.sequencer.verify(ordinary, verify_baseline, folder=self._folder)
        by_label = {record.label: record for record in ordinary}
        for issue in result.issues:
            self._log.report(issue, by_label.get(issue.file))

    def _admit_holdings(self, holdings: PeriodRecord, baseline: int) -> None:
        ctx = self._ctx
        if ctx.detector.check(holdings, self.pool):
            self._duplicate_period(holdings, "holdings")
            return
        ctx.sequencer.assign([holdings], baseline)
        if ctx.detector.name_conflict(holdings, self.pool):
            self._duplicate_name(holdings, "holdings")
            return
        self._admit(holdings, ctx.builder.build(holdings), rename=True)

    def _passes_calendar(self, record: PeriodRecord) -> bool:
        issues = self._ctx.calendar.validate(record, self._ctx.today)
        for issue in issues:
            self._log.report(issue, record)
        return not issues

    def _duplicate_period(self, record: PeriodRecord, what: str) -> None:
        key = self._ctx.detector.period_key(record)
        self._log.report(
            AdmissionIssue(
                IssueKind.DUPLICATE_PERIOD,
                f"Duplicate time period '{key}' for {what} '{record.label}' in folder '{self._folder}'.",
                record.label,
            ),
            record,
        )

    def _duplicate_name(self, record: PeriodRecord, what: str) -> None:
        name = self._ctx.builder.build(record)
        self._log.report(
            AdmissionIssue(
                IssueKind.DUPLICATE_NAME,
                f"Final filename '{name}' for {what} '{record.label}' already exists in folder '{self._folder}'.",
                record.label,
            ),
            record,
        )

    def _admit(self, record: PeriodRecord, final_name: str, rename: bool) -> None:
        record.final_name = final_name
        self.pool.append(record)
        if rename:
            self.rename_plan.append(record)


class AdmissionOrchestrator:
    """Runs every folder batch through parse, calendar, sequencing and naming.

    Renames are applied only after a folder has passed every check. Under the
    fail-fast policy a folder stops at its first issue and the run stops at the
    first failing folder; under the accumulate policy every issue of every
    folder is collected.
    """

    def __init__(self, context: AdmissionContext) -> None:
        self._context = context

    def run(
        self,
        batches: Iterable[FolderBatch],
        environment_issues: Sequence[AdmissionIssue] = (),
    ) -> AdmissionReport:
        results: list[FolderResult] = []
        for batch in batches:
            result = self.admit_folder(batch)
            results.append(result)
            if not result.passed and self._context.policy is FailurePolicy.FAIL_FAST:
                break
        return AdmissionReport(folders=tuple(results), environment_issues=tuple(environment_issues))

    def admit_folder(self, batch: FolderBatch) -> FolderResult:
        log = _IssueLog(self._context.policy)
        run = _FolderRun(self._context, batch, log)
        try:
            run.execute()
        except AdmissionHalted:
            pass

        renamed: list[tuple[str, str]] = []
        if not log.issues and self._context.renamer is not None:
            try:
                self._apply_renames(batch.cadence, run.rename_plan, renamed)
            except RenameError as exc:
                log.issues.append(exc.to_issue())

        result = FolderResult(
            cadence=batch.cadence,
            records=tuple(run.records),
            issues=tuple(log.issues),
            renamed=tuple(renamed),
            skipped=tuple(run.skipped),
        )
        if result.passed:
            logger.info("folder_admitted", folder=batch.cadence.value, admitted=len(result.admitted))
        else:
            logger.warning("folder_failed", folder=batch.cadence.value, reason=result.reason, issues=len(result.issues))
        return result

    def _apply_renames(
        self,
        cadence: Cadence,
        plan: Sequence[PeriodRecord],
        renamed: list[tuple[str, str]],
    ) -> None:
        for record in plan:
            if record.final_name == record.original_name:
                continue
            self._context.renamer.rename(cadence, record.original_name, record.final_name)
            renamed.append((record.original_name, record.final_name))
            logger.info("file_renamed", folder=cadence.value, source=record.original_name, target=record.final_name)
