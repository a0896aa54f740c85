"""Central configuration for the period gate package."""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from period_gate.application.dto import FailurePolicy

TRACKER_DIR = Path("trackerFiles")


@dataclass(slots=True, frozen=True)
class Settings:
    tracker_dir: Path
    tracker_template: str
    ci_policy: FailurePolicy
    gate_policy: FailurePolicy
    log_level: str


SETTINGS = Settings(
    tracker_dir=TRACKER_DIR,
    tracker_template="serial_{cadence}.txt",
    ci_policy=FailurePolicy.ACCUMULATE,
    gate_policy=FailurePolicy.FAIL_FAST,
    log_level=os.getenv("PERIOD_GATE_LOG_LEVEL", "WARNING").upper(),
)
