from period_gate.domain.errors import IssueKind
from period_gate.domain.models import Cadence
from period_gate.domain.naming import CanonicalNameBuilder
from period_gate.domain.parser import FileNameParser
from period_gate.domain.sequencer import SerialSequencer, assignment_order, highest


def parse(*names, cadence=Cadence.DAILY):
    parser = FileNameParser()
    return [parser.parse(name, cadence) for name in names]


def test_assigns_in_chronological_order():
    records = parse("2025 3_day Mar.csv", "2024 28_day Feb.csv", "2025 12_day Feb.csv")

    result = SerialSequencer().assign(records, baseline=40)

    assert [r.original_name for r in result.records] == [
        "2024 28_day Feb.csv",
        "2025 12_day Feb.csv",
        "2025 3_day Mar.csv",
    ]
    assert [r.serial for r in result.records] == [41, 42, 43]
    assert result.last_serial == 43
    assert result.ok


def test_missing_file_gets_next_serial_and_canonical_name():
    (record,) = parse("2025 15_day Mar.csv")

    result = SerialSequencer().assign([record], baseline=14)

    assert result.last_serial == 15
    assert CanonicalNameBuilder().build(record) == "15 2025 15_day Mar.csv"


def test_assignment_order_uses_month_number_not_name():
    records = parse("2024 1_month Dec.csv", "2024 1_month Apr.csv", cadence=Cadence.MONTHLY)

    assert [r.month_name for r in assignment_order(records)] == ["apr", "dec"]


def test_verify_accepts_contiguous_run():
    records = parse("12 2025 12_day Mar.csv", "11 2025 11_day Mar.csv", "13 2025 13_day Mar.csv")

    result = SerialSequencer().verify(records, baseline=10, folder="daily")

    assert result.ok
    assert result.last_serial == 13
    assert [r.serial for r in result.records] == [11, 12, 13]


def test_gap_is_reported_once_and_resynchronizes():
    records = parse("11 2025 11_day Mar.csv", "13 2025 13_day Mar.csv", "14 2025 14_day Mar.csv")

    result = SerialSequencer().verify(records, baseline=10, folder="daily")

    assert len(result.issues) == 1
    assert "Expected '12'" in result.issues[0].message
    assert result.issues[0].file == "13 2025 13_day Mar.csv"
    assert result.issues[0].kind is IssueKind.SEQUENCE


def test_duplicate_serial_is_reported():
    records = parse("11 2025 10_day Mar.csv", "11 2025 11_day Mar.csv")

    result = SerialSequencer().verify(records, baseline=10, folder="daily")

    messages = [issue.message for issue in result.issues]
    assert len(messages) == 2
    assert "not in correct sequence" in messages[0]
    assert "Duplicate serial '11'" in messages[1]


def test_serial_at_or_below_baseline_is_rejected():
    (record,) = parse("10 2025 10_day Mar.csv")

    result = SerialSequencer().verify([record], baseline=10, folder="daily")

    assert not result.ok
    assert "not greater than last tracked serial '10'" in result.issues[0].message
    assert result.last_serial == 10


def test_highest_serial():
    assert highest([]) == 0
    assert highest(parse("2025 3_day Mar.csv", "7 2025 4_day Mar.csv", "5 2025 5_day Mar.csv")) == 7
