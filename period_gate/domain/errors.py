"""Error taxonomy for period file admission."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class IssueKind(str, Enum):
    PARSE = "parse"
    CALENDAR = "calendar"
    SEQUENCE = "sequence"
    DUPLICATE_PERIOD = "duplicate_period"
    DUPLICATE_NAME = "duplicate_name"
    FOLDER = "folder"
    ENVIRONMENT = "environment"
    RENAME = "rename"


@dataclass(frozen=True)
class AdmissionIssue:
    """A single violated rule, reported against one file or folder."""

    kind: IssueKind
    message: str
    file: str | None = None


class PeriodGateError(Exception):
    """Base exception for all admission errors."""

    kind = IssueKind.FOLDER

    def __init__(self, message: str, file: str | None = None) -> None:
        self.message = message
        self.file = file
        super().__init__(message)

    def to_issue(self) -> AdmissionIssue:
        return AdmissionIssue(kind=self.kind, message=self.message, file=self.file)


class ParseError(PeriodGateError):
    """A filename does not match the shape required by its cadence."""

    kind = IssueKind.PARSE


class EnvironmentFault(PeriodGateError):
    """An input or tracker file is missing or unreadable."""

    kind = IssueKind.ENVIRONMENT


class RenameError(PeriodGateError):
    """An admitted file could not be moved to its canonical name."""

    kind = IssueKind.RENAME


class AdmissionHalted(PeriodGateError):
    """Raised under the fail-fast policy to stop a folder at its first issue."""

    def __init__(self, issue: AdmissionIssue) -> None:
        self.issue = issue
        super().__init__(issue.message, file=issue.file)
        self.kind = issue.kind
