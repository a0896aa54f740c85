"""Lexical parsing of archive filenames into period records."""
from __future__ import annotations

import re

from .errors import ParseError
from .models import Cadence, PeriodRecord, unhandled_cadence

HOLDINGS_NAME = "holdings.csv"

_PERIOD_PATTERN = r"^(?:(?P<serial>\d+)\s+)?(?P<year>\d{{4}})\s+(?P<period>\d+)_{event}\s+(?P<month>[A-Za-z]+)\.csv$"
_YEARLY_PATTERN = r"^(?:(?P<serial>\d+)\s+)?(?P<year>\d{4})\s+1_year\s+(?P<month>[A-Za-z]+)\.csv$"


def _compile(cadence: Cadence) -> re.Pattern[str]:
    match cadence:
        case Cadence.DAILY | Cadence.WEEKLY | Cadence.MONTHLY:
            return re.compile(_PERIOD_PATTERN.format(event=cadence.event_label), re.IGNORECASE)
        case Cadence.YEARLY:
            return re.compile(_YEARLY_PATTERN, re.IGNORECASE)
    unhandled_cadence(cadence)


_PATTERNS = {cadence: _compile(cadence) for cadence in Cadence}


def expected_shape(cadence: Cadence) -> str:
    if cadence is Cadence.YEARLY:
        return "[<serial>] <year> 1_year <month>.csv"
    return f"[<serial>] <year> <number>_{cadence.event_label} <month>.csv"


class FileNameParser:
    """Turns a raw filename plus its cadence into a ``PeriodRecord``.

    Only the shape of the name is checked here; whether the date it names is
    legal is left to ``CalendarRuleValidator``.
    """

    def __init__(self, holdings_name: str = HOLDINGS_NAME) -> None:
        self._holdings_name = holdings_name.lower()

    def is_holdings(self, raw_name: str) -> bool:
        return raw_name.strip().lower() == self._holdings_name

    def parse(self, raw_name: str, cadence: Cadence, source_path: str | None = None) -> PeriodRecord:
        label = source_path or raw_name
        name = raw_name.strip()

        if self.is_holdings(name):
            return PeriodRecord(original_name=raw_name, cadence=cadence, is_holdings=True, source_path=source_path)

        if not name.lower().endswith(".csv"):
            raise ParseError(f"File '{label}' does not have .csv extension.", file=label)

        found = _PATTERNS[cadence].match(name)
        if found is None:
            raise ParseError(
                f"Invalid file format: '{label}' does not match '{expected_shape(cadence)}'",
                file=label,
            )

        serial = found.group("serial")
        period = 1 if cadence is Cadence.YEARLY else int(found.group("period"))
        return PeriodRecord(
            original_name=raw_name,
            cadence=cadence,
            serial=int(serial) if serial is not None else None,
            year=int(found.group("year")),
            period_number=period,
            month_name=found.group("month").lower(),
            is_missing_backfill=serial is None,
            source_path=source_path,
        )
