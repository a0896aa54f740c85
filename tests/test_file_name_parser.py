import pytest

from period_gate.domain.errors import IssueKind, ParseError
from period_gate.domain.models import Cadence
from period_gate.domain.naming import CanonicalNameBuilder
from period_gate.domain.parser import FileNameParser


def test_parses_serial_year_period_and_month():
    record = FileNameParser().parse("15 2025 15_day Mar.csv", Cadence.DAILY)

    assert record.serial == 15
    assert record.year == 2025
    assert record.period_number == 15
    assert record.month_name == "mar"
    assert record.month_number == 3
    assert not record.is_missing_backfill
    assert not record.is_holdings


def test_name_without_serial_is_missing_backfill():
    record = FileNameParser().parse("2025 15_day Mar.csv", Cadence.DAILY)

    assert record.serial is None
    assert record.is_missing_backfill
    assert record.period_number == 15


def test_holdings_is_case_insensitive_and_unparsed():
    record = FileNameParser().parse("HOLDINGS.CSV", Cadence.WEEKLY)

    assert record.is_holdings
    assert record.year is None
    assert record.period_number is None
    assert record.serial is None


def test_yearly_token_is_fixed():
    record = FileNameParser().parse("2024 1_year December.csv", Cadence.YEARLY)

    assert record.period_number == 1
    assert record.month_name == "december"
    assert record.is_missing_backfill

    with pytest.raises(ParseError):
        FileNameParser().parse("3 2024 2_year Dec.csv", Cadence.YEARLY)


def test_event_label_must_match_cadence():
    with pytest.raises(ParseError) as excinfo:
        FileNameParser().parse("15 2025 2_week Mar.csv", Cadence.DAILY)

    assert "Invalid file format" in excinfo.value.message
    assert excinfo.value.to_issue().kind is IssueKind.PARSE


def test_rejects_other_extensions():
    with pytest.raises(ParseError) as excinfo:
        FileNameParser().parse("15 2025 15_day Mar.txt", Cadence.DAILY, source_path="daily/15 2025 15_day Mar.txt")

    assert ".csv extension" in excinfo.value.message
    assert excinfo.value.file == "daily/15 2025 15_day Mar.txt"


@pytest.mark.parametrize(
    "name",
    [
        "15 2025 15_day.csv",
        "15 25 15_day Mar.csv",
        "x 2025 15_day Mar.csv",
        "15 2025 day_15 Mar.csv",
    ],
)
def test_malformed_names_fail(name):
    with pytest.raises(ParseError):
        FileNameParser().parse(name, Cadence.DAILY)


def test_calendar_legality_is_not_checked_while_parsing():
    record = FileNameParser().parse("2025 31_day Feb.csv", Cadence.DAILY)

    assert record.period_number == 31
    assert record.month_name == "feb"


@pytest.mark.parametrize(
    "cadence, name",
    [
        (Cadence.DAILY, "7 2025 14_day Mar.csv"),
        (Cadence.WEEKLY, "3 2025 2_week March.csv"),
        (Cadence.MONTHLY, "12 2024 9_month Sept.csv"),
        (Cadence.YEARLY, "2 2024 1_year Dec.csv"),
    ],
)
def test_built_names_parse_back(cadence, name):
    parser = FileNameParser()
    record = parser.parse(name, cadence)

    rebuilt = CanonicalNameBuilder().build(record)
    again = parser.parse(rebuilt, cadence)

    assert rebuilt == name
    assert (again.serial, again.year, again.period_number, again.month_name) == (
        record.serial,
        record.year,
        record.period_number,
        record.month_name,
    )
