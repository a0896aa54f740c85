"""Canonical archive filenames."""
from __future__ import annotations

from .models import Cadence, PeriodRecord, unhandled_cadence


def capitalize_month(name: str) -> str:
    return name[:1].upper() + name[1:]


class CanonicalNameBuilder:
    """Builds ``"<serial> <year> <n>_<event> <Month>.csv"`` from validated fields.

    Records reaching this point have been parsed, validated and sequenced, so
    missing fields mean an earlier stage is broken and raise ``ValueError``.
    """

    def build(self, record: PeriodRecord) -> str:
        if None in (record.serial, record.year, record.period_number) or not record.month_name:
            raise ValueError(f"Cannot build a canonical name for incomplete record {record.original_name!r}")

        month = capitalize_month(record.month_name)
        match record.cadence:
            case Cadence.DAILY | Cadence.WEEKLY | Cadence.MONTHLY:
                period = f"{record.period_number}_{record.cadence.event_label}"
            case Cadence.YEARLY:
                period = "1_year"
            case _:
                unhandled_cadence(record.cadence)
        return f"{record.serial} {record.year} {period} {month}.csv"
