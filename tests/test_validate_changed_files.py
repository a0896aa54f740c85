from datetime import date
from pathlib import Path

import pytest

from period_gate.application.ci.use_cases import ChangedFilesContext, ValidateChangedFilesUseCase
from period_gate.application.dto import FailurePolicy
from period_gate.domain.errors import IssueKind
from period_gate.domain.models import Cadence
from period_gate.infrastructure.archive.committed import StaticCommittedArchive
from period_gate.infrastructure.tracker.serial_tracker import SerialTracker

TODAY = date(2025, 3, 20)


@pytest.fixture
def trackers(tmp_path: Path) -> Path:
    directory = tmp_path / "trackerFiles"
    directory.mkdir()
    (directory / "serial_daily.txt").write_text("14\n")
    (directory / "serial_monthly.txt").write_text("2\n")
    return directory


def run(tmp_path: Path, trackers: Path, lines: list[str], policy=FailurePolicy.ACCUMULATE):
    listing = tmp_path / "changed_files.txt"
    listing.write_text("\n".join(lines) + "\n")
    context = ChangedFilesContext(
        tracker=SerialTracker(trackers),
        archive=StaticCommittedArchive(),
        today=TODAY,
        policy=policy,
    )
    return ValidateChangedFilesUseCase(context).execute(listing)


def test_changed_files_pass(tmp_path: Path, trackers: Path):
    report = run(tmp_path, trackers, ["daily/2025 14_day Mar.csv", "monthly/3 2025 2_month Feb.csv", "README.md"])

    assert report.passed
    assert [folder.cadence for folder in report.folders] == [Cadence.DAILY, Cadence.MONTHLY]
    daily = report.folders[0]
    assert daily.records[0].final_name == "15 2025 14_day Mar.csv"
    assert daily.renamed == ()


def test_errors_name_the_repository_path(tmp_path: Path, trackers: Path):
    report = run(tmp_path, trackers, ["daily/2025 15_day Mar.csv"])

    issue = next(iter(report.iter_all_issues()))
    assert issue.file == "daily/2025 15_day Mar.csv"
    assert "weekend" in issue.message


def test_renamed_path_is_validated_under_its_new_name(tmp_path: Path, trackers: Path):
    report = run(tmp_path, trackers, ["daily/{draft.csv => 15 2025 14_day Mar.csv}"])

    assert report.passed
    assert report.folders[0].records[0].original_name == "15 2025 14_day Mar.csv"


def test_only_changed_cadences_need_trackers(tmp_path: Path, trackers: Path):
    report = run(tmp_path, trackers, ["weekly/2025 2_week Mar.csv"])

    assert not report.passed
    assert [issue.kind for issue in report.environment_issues] == [IssueKind.ENVIRONMENT]
    assert "serial_weekly.txt" in report.environment_issues[0].message


def test_nothing_to_validate(tmp_path: Path, trackers: Path):
    report = run(tmp_path, trackers, ["docs/readme.md"])

    assert report.passed
    assert report.folders == ()


def test_missing_listing_fails(tmp_path: Path, trackers: Path):
    context = ChangedFilesContext(tracker=SerialTracker(trackers), archive=StaticCommittedArchive(), today=TODAY)

    report = ValidateChangedFilesUseCase(context).execute(tmp_path / "absent.txt")

    assert not report.passed
    assert report.environment_issues[0].kind is IssueKind.ENVIRONMENT
