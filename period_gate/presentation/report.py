"""Console and file renderings of an admission report."""
from __future__ import annotations

from pathlib import Path

import pandas as pd

from period_gate.domain.results import AdmissionReport

REPORT_COLUMNS = [
    "folder",
    "original_name",
    "final_name",
    "serial",
    "period",
    "status",
    "reason",
]


def issue_lines(report: AdmissionReport) -> list[str]:
    return [f"ERROR: {issue.message}" for issue in report.iter_all_issues()]


def ci_banner(report: AdmissionReport) -> str:
    if report.has_issues():
        return "❌ PERIOD ARCHIVE VALIDATION FAILED"
    if not report.folders:
        return "✅ No files in daily/weekly/monthly/yearly folders changed. Skipping validation."
    return "✅ Period archive validation passed for all changed files."


def gate_banner(report: AdmissionReport) -> str:
    if report.has_issues():
        first = next(iter(report.iter_all_issues()))
        return f"❌ DELETE COMMIT - {first.message}"
    return "✅ VALID COMMIT - All folders passed validation"


def records_to_dataframe(report: AdmissionReport) -> pd.DataFrame:
    rows = []
    for folder in report.folders:
        for record in folder.records:
            rows.append(
                {
                    "folder": folder.cadence.value,
                    "original_name": record.original_name,
                    "final_name": record.final_name or "",
                    "serial": "" if record.serial is None else record.serial,
                    "period": "" if record.year is None else f"{record.year} {record.period_number} {record.month_name}",
                    "status": record.status,
                    "reason": record.rejection or "",
                }
            )
    return pd.DataFrame(rows, columns=REPORT_COLUMNS)


def write_report(report: AdmissionReport, path: Path) -> Path:
    """Write one row per record as CSV, or as an Excel sheet for ``.xlsx`` paths."""
    path = Path(path)
    frame = records_to_dataframe(report)
    if path.suffix.lower() == ".xlsx":
        frame.to_excel(path, index=False, sheet_name="admission", engine="openpyxl")
    else:
        frame.to_csv(path, index=False)
    return path
