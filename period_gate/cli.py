"""Command-line entrypoint for period file admission."""
from __future__ import annotations

import argparse
import sys
from datetime import date
from pathlib import Path

from period_gate.application.ci.use_cases import ChangedFilesContext, ValidateChangedFilesUseCase
from period_gate.application.dto import FailurePolicy
from period_gate.application.gate.use_cases import GateContext, GateFoldersUseCase
from period_gate.config import SETTINGS
from period_gate.domain.models import Cadence
from period_gate.domain.results import AdmissionReport
from period_gate.infrastructure.archive.committed import GitCommittedArchive, StaticCommittedArchive
from period_gate.infrastructure.archive.local_folder import LocalFolderRepository
from period_gate.infrastructure.tracker.serial_tracker import SerialTracker
from period_gate.logging_config import configure_logging
from period_gate.presentation.report import ci_banner, gate_banner, issue_lines, write_report


def _cadence(value: str) -> Cadence:
    cadence = Cadence.from_folder(value)
    if cadence is None:
        raise argparse.ArgumentTypeError(f"unknown folder {value!r}")
    return cadence


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Admit period files into the serially-numbered archive")
    parser.add_argument("--today", type=str, help="Override the processing date (YYYY-MM-DD)")
    parser.add_argument(
        "--policy",
        choices=[policy.value for policy in FailurePolicy],
        help="Stop at the first error or collect every error",
    )
    parser.add_argument("--report", type=Path, help="Write a per-file report (.csv or .xlsx)")
    parser.add_argument("--log-level", default=SETTINGS.log_level, help="Log level for stderr output")
    commands = parser.add_subparsers(dest="command", required=True)

    ci = commands.add_parser("ci", help="Validate the files listed in a changed-files list")
    ci.add_argument("changed_files", type=Path, help="Path to changed_files.txt")
    ci.add_argument("--tracker-dir", type=Path, default=SETTINGS.tracker_dir, help="Directory of serial_<cadence>.txt")

    gate = commands.add_parser("gate", help="Validate and rename the cadence folders of a working tree")
    gate.add_argument("root", type=Path, nargs="?", default=Path("."), help="Directory holding the cadence folders")
    gate.add_argument("--tracker-dir", type=Path, help="Read serial baselines from this directory")
    gate.add_argument("--main-ref", type=str, help="Git ref holding the committed archive")
    gate.add_argument(
        "--blocked-folder",
        type=_cadence,
        action="append",
        default=[],
        help="Folder with an open change request (repeatable)",
    )
    return parser.parse_args(argv)


def _run_ci(args: argparse.Namespace, today: date) -> AdmissionReport:
    policy = FailurePolicy(args.policy) if args.policy else SETTINGS.ci_policy
    context = ChangedFilesContext(
        tracker=SerialTracker(args.tracker_dir, SETTINGS.tracker_template),
        archive=StaticCommittedArchive(),
        today=today,
        policy=policy,
    )
    report = ValidateChangedFilesUseCase(context).execute(args.changed_files)
    for line in issue_lines(report):
        print(line)
    print(ci_banner(report))
    return report


def _run_gate(args: argparse.Namespace, today: date) -> AdmissionReport:
    policy = FailurePolicy(args.policy) if args.policy else SETTINGS.gate_policy
    folders = LocalFolderRepository(args.root)
    if args.main_ref:
        archive = GitCommittedArchive(
            args.root,
            args.main_ref,
            folders={cadence: folders.folder(cadence).name for cadence in Cadence},
            blocked=args.blocked_folder,
        )
    else:
        archive = StaticCommittedArchive(blocked=args.blocked_folder)
    tracker = SerialTracker(args.tracker_dir, SETTINGS.tracker_template) if args.tracker_dir else None

    context = GateContext(folders=folders, archive=archive, today=today, policy=policy, tracker=tracker)
    report = GateFoldersUseCase(context).execute()
    for folder in report.folders:
        for source, target in folder.renamed:
            print(f"✔ Renamed: {source} → {target}")
    print(gate_banner(report))
    return report


def main(argv: list[str] | None = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    configure_logging(args.log_level)
    today = date.fromisoformat(args.today) if args.today else date.today()

    if args.command == "ci":
        report = _run_ci(args, today)
    else:
        report = _run_gate(args, today)

    if args.report:
        write_report(report, args.report)
    return 0 if report.passed else 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
