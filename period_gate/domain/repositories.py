"""Repository interfaces anchoring the domain layer."""
from __future__ import annotations

from typing import Protocol, Sequence

from .models import Cadence


class CommittedArchive(Protocol):
    """Files already on the main line of the archive."""

    def list_files(self, cadence: Cadence) -> Sequence[str]:
        ...

    def has_open_change_request(self, cadence: Cadence) -> bool:
        ...


class FolderRenamer(Protocol):
    """Moves an admitted file to its canonical name inside its cadence folder."""

    def rename(self, cadence: Cadence, original_name: str, final_name: str) -> None:
        ...
