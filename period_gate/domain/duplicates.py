"""Duplicate detection on semantic periods and canonical names."""
from __future__ import annotations

from typing import Iterable

from .models import Cadence, PeriodRecord, unhandled_cadence
from .naming import CanonicalNameBuilder


class DuplicatePeriodDetector:
    """Flags records that repeat a reporting period or a canonical filename.

    The period key is coarser than the filename: two files with different
    serials still describe the same period when their keys match.
    """

    def __init__(self, builder: CanonicalNameBuilder | None = None) -> None:
        self._builder = builder or CanonicalNameBuilder()

    def period_key(self, record: PeriodRecord) -> str:
        month = record.month_number
        if month is None:
            month = record.month_name
        match record.cadence:
            case Cadence.DAILY | Cadence.WEEKLY:
                parts = (record.year, month, record.period_number)
            case Cadence.MONTHLY:
                parts = (record.year, month)
            case Cadence.YEARLY:
                parts = (record.year,)
            case _:
                unhandled_cadence(record.cadence)
        return "-".join(str(part) for part in parts)

    def check(self, record: PeriodRecord, existing: Iterable[PeriodRecord]) -> bool:
        key = self.period_key(record)
        return any(self.period_key(other) == key for other in existing if other is not record)

    def canonical_name(self, record: PeriodRecord) -> str:
        if record.serial is None or record.year is None:
            return record.final_name or record.original_name
        return self._builder.build(record)

    def name_conflict(self, record: PeriodRecord, existing: Iterable[PeriodRecord]) -> bool:
        name = self._builder.build(record)
        return any(self.canonical_name(other) == name for other in existing if other is not record)
