"""Domain models for the period file admission pipeline.

A ``PeriodRecord`` is created from one raw filename and carried through the
parse, calendar, sequencing and naming stages until it is either admitted
under its canonical name or rejected with a reason.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import NoReturn


class Cadence(Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"

    @property
    def event_label(self) -> str:
        match self:
            case Cadence.DAILY:
                return "day"
            case Cadence.WEEKLY:
                return "week"
            case Cadence.MONTHLY:
                return "month"
            case Cadence.YEARLY:
                return "year"
        unhandled_cadence(self)

    @property
    def folder_name(self) -> str:
        return self.value.capitalize()

    @classmethod
    def from_folder(cls, name: str) -> Cadence | None:
        lowered = name.strip().lower()
        for cadence in cls:
            if cadence.value == lowered:
                return cadence
        return None


def unhandled_cadence(cadence: object) -> NoReturn:
    raise ValueError(f"Unhandled cadence: {cadence!r}")


MONTH_NAMES = (
    "january",
    "february",
    "march",
    "april",
    "may",
    "june",
    "july",
    "august",
    "september",
    "october",
    "november",
    "december",
)

_MONTH_ALIASES: dict[str, int] = {}
for _number, _name in enumerate(MONTH_NAMES, start=1):
    _MONTH_ALIASES[_name] = _number
    _MONTH_ALIASES[_name[:3]] = _number
_MONTH_ALIASES["sept"] = 9


def resolve_month(token: str | None) -> int | None:
    """Resolve an English month name or abbreviation to 1-12, else None."""
    if token is None:
        return None
    return _MONTH_ALIASES.get(token.strip().lower())


def full_month_name(number: int) -> str:
    return MONTH_NAMES[number - 1]


@dataclass(slots=True)
class PeriodRecord:
    """One candidate file for a cadence folder."""

    original_name: str
    cadence: Cadence
    serial: int | None = None
    year: int | None = None
    period_number: int | None = None
    month_name: str | None = None
    is_missing_backfill: bool = False
    is_holdings: bool = False
    final_name: str | None = None
    source_path: str | None = None
    rejection: str | None = None

    @property
    def month_number(self) -> int | None:
        return resolve_month(self.month_name)

    @property
    def label(self) -> str:
        return self.source_path or self.original_name

    @property
    def status(self) -> str:
        if self.rejection is not None:
            return "rejected"
        if self.final_name is not None:
            return "admitted"
        return "pending"

    def reject(self, reason: str) -> None:
        if self.rejection is None:
            self.rejection = reason
