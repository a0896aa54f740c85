"""Serial number allocation and verification within one cadence."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Sequence

from .errors import AdmissionIssue, IssueKind
from .models import PeriodRecord


@dataclass(frozen=True)
class SerialResult:
    records: Sequence[PeriodRecord]
    last_serial: int
    issues: Sequence[AdmissionIssue] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        return not self.issues


def assignment_order(records: Iterable[PeriodRecord]) -> list[PeriodRecord]:
    """Chronological order used when handing out new serials."""
    return sorted(records, key=lambda r: (r.year, r.month_number or 0, r.period_number))


def highest(records: Iterable[PeriodRecord]) -> int:
    return max((r.serial for r in records if r.serial is not None), default=0)


class SerialSequencer:
    """Allocates or verifies the ascending serial run of a cadence.

    ``assign`` hands out ``baseline + 1, baseline + 2, ...`` in chronological
    order to records that have no serial yet. ``verify`` checks records that
    already carry one: sorted by serial they must continue the run from the
    baseline without gaps or repeats.
    """

    def assign(self, records: Sequence[PeriodRecord], baseline: int) -> SerialResult:
        ordered = assignment_order(records)
        serial = baseline
        for record in ordered:
            serial += 1
            record.serial = serial
        return SerialResult(records=tuple(ordered), last_serial=serial)

    def verify(self, records: Sequence[PeriodRecord], baseline: int, folder: str = "") -> SerialResult:
        ordered = sorted(records, key=lambda r: r.serial)
        issues: list[AdmissionIssue] = []
        expected = baseline + 1
        previous: int | None = None

        for record in ordered:
            serial = record.serial
            if serial <= baseline:
                issues.append(
                    self._issue(
                        record,
                        f"Serial '{serial}' in file '{record.label}' is not greater than last tracked serial "
                        f"'{baseline}' for folder '{folder}'.",
                    )
                )
            if serial != expected:
                issues.append(
                    self._issue(
                        record,
                        f"Serial '{serial}' in file '{record.label}' is not in correct sequence. "
                        f"Expected '{expected}'.",
                    )
                )
                expected = serial + 1
            else:
                expected += 1
            if previous == serial:
                issues.append(
                    self._issue(
                        record,
                        f"Duplicate serial '{serial}' detected in folder '{folder}' for file '{record.label}'.",
                    )
                )
            previous = serial

        last = max(baseline, ordered[-1].serial) if ordered else baseline
        return SerialResult(records=tuple(ordered), last_serial=last, issues=tuple(issues))

    @staticmethod
    def _issue(record: PeriodRecord, message: str) -> AdmissionIssue:
        return AdmissionIssue(kind=IssueKind.SEQUENCE, message=message, file=record.label)
