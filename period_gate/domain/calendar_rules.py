"""Cadence-specific calendar legality rules.

Every check takes the reference date explicitly so results never depend on
the wall clock.
"""
from __future__ import annotations

from datetime import date, timedelta

from .errors import AdmissionIssue, IssueKind
from .models import Cadence, PeriodRecord, unhandled_cadence

MIN_YEAR = 2000
MAX_WEEKS = 5
SATURDAY = 5


def first_monday(year: int, month: int) -> date:
    first = date(year, month, 1)
    return first + timedelta(days=(7 - first.weekday()) % 7)


def week_start(year: int, month: int, week: int) -> date:
    """Monday that opens week ``week`` of the month, counted from the first Monday."""
    return first_monday(year, month) + timedelta(weeks=week - 1)


def current_week_number(today: date) -> int:
    """Monday-based week of the month containing ``today``; 0 before the first Monday."""
    monday = first_monday(today.year, today.month)
    if today < monday:
        return 0
    return min((today - monday).days // 7 + 1, MAX_WEEKS)


def is_weekend(day: date) -> bool:
    return day.weekday() >= SATURDAY


class CalendarRuleValidator:
    def __init__(self, min_year: int = MIN_YEAR) -> None:
        self._min_year = min_year

    def validate(self, record: PeriodRecord, today: date) -> list[AdmissionIssue]:
        issues: list[AdmissionIssue] = []
        month = record.month_number

        if month is None:
            issues.append(self._issue(record, f"Invalid month name '{record.month_name}' in file '{record.label}'."))
        issues.extend(self._check_year(record, month, today))

        match record.cadence:
            case Cadence.DAILY:
                issues.extend(self._check_daily(record, month, today))
            case Cadence.WEEKLY:
                issues.extend(self._check_weekly(record, month, today))
            case Cadence.MONTHLY:
                issues.extend(self._check_monthly(record, month))
            case Cadence.YEARLY:
                issues.extend(self._check_yearly(record, month, today))
            case _:
                unhandled_cadence(record.cadence)
        return issues

    def first_error(self, record: PeriodRecord, today: date) -> AdmissionIssue | None:
        issues = self.validate(record, today)
        return issues[0] if issues else None

    def _check_year(self, record: PeriodRecord, month: int | None, today: date) -> list[AdmissionIssue]:
        year = record.year
        if year < self._min_year:
            return [self._issue(record, f"Year '{year}' is less than {self._min_year} in file '{record.label}'.")]
        if year > today.year:
            return [self._issue(record, f"Year '{year}' is in the future in file '{record.label}'.")]
        if month is not None and year == today.year and month > today.month:
            return [self._issue(record, f"'{record.month_name} {year}' is a future month in file '{record.label}'.")]
        return []

    def _check_daily(self, record: PeriodRecord, month: int | None, today: date) -> list[AdmissionIssue]:
        if month is None:
            return []
        try:
            day = date(record.year, month, record.period_number)
        except (ValueError, OverflowError):
            return [
                self._issue(
                    record,
                    f"'{record.year}-{month}-{record.period_number}' is not a valid calendar date "
                    f"for daily file '{record.label}'.",
                )
            ]

        issues: list[AdmissionIssue] = []
        if day > today:
            issues.append(self._issue(record, f"'{day.isoformat()}' is in the future for daily file '{record.label}'."))
        if is_weekend(day):
            issues.append(self._issue(record, f"'{day.isoformat()}' falls on a weekend for daily file '{record.label}'."))
        return issues

    def _check_weekly(self, record: PeriodRecord, month: int | None, today: date) -> list[AdmissionIssue]:
        week = record.period_number
        if not 1 <= week <= MAX_WEEKS:
            return [
                self._issue(
                    record,
                    f"Week number '{week}' is invalid in '{record.label}'. Only 1-{MAX_WEEKS} are allowed.",
                )
            ]
        if month is None or not self._min_year <= record.year <= today.year:
            return []

        issues: list[AdmissionIssue] = []
        if week_start(record.year, month, week).month != month:
            issues.append(
                self._issue(
                    record,
                    f"Week {week} does not exist in {record.month_name} {record.year} for file '{record.label}'.",
                )
            )
        elif record.year == today.year and month == today.month:
            current = current_week_number(today)
            if current == 0 or week > current:
                issues.append(
                    self._issue(
                        record,
                        f"Week '{week}' of '{record.month_name} {record.year}' is a future week "
                        f"for file '{record.label}'.",
                    )
                )
        return issues

    def _check_monthly(self, record: PeriodRecord, month: int | None) -> list[AdmissionIssue]:
        number = record.period_number
        if not 1 <= number <= 12:
            return [
                self._issue(
                    record,
                    f"Invalid month number '{number}' in monthly file '{record.label}'. Only 1-12 allowed.",
                )
            ]
        if month is not None and number != month:
            return [
                self._issue(
                    record,
                    f"Month number '{number}' does not match month '{record.month_name}' "
                    f"in file '{record.label}'.",
                )
            ]
        return []

    def _check_yearly(self, record: PeriodRecord, month: int | None, today: date) -> list[AdmissionIssue]:
        issues: list[AdmissionIssue] = []
        if record.period_number != 1:
            issues.append(
                self._issue(
                    record,
                    f"Invalid yearly count '{record.period_number}' in file '{record.label}'. "
                    "Only '1_year' is allowed.",
                )
            )
        if month is not None and month != 12:
            issues.append(
                self._issue(
                    record,
                    f"Yearly file '{record.label}' must use December as month (e.g. 'Dec' or 'December').",
                )
            )
        if record.year == today.year and today.month != 12:
            issues.append(
                self._issue(
                    record,
                    f"Yearly data for '{record.year}' can only be uploaded during December "
                    f"for file '{record.label}'.",
                )
            )
        return issues

    @staticmethod
    def _issue(record: PeriodRecord, message: str) -> AdmissionIssue:
        return AdmissionIssue(kind=IssueKind.CALENDAR, message=message, file=record.label)
