"""Application-level DTOs for folder admission."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence

from period_gate.domain.models import Cadence


class FailurePolicy(str, Enum):
    FAIL_FAST = "fail-fast"
    ACCUMULATE = "accumulate"


@dataclass(slots=True, frozen=True)
class FolderBatch:
    """Raw filenames submitted for one cadence folder."""

    cadence: Cadence
    files: Sequence[str] = field(default_factory=tuple)
    baseline: int = 0
    source_folder: str | None = None

    def source_path(self, name: str) -> str | None:
        if self.source_folder is None:
            return None
        return f"{self.source_folder}/{name}"
