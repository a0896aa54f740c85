"""Filesystem repository for the cadence folders of a working tree."""
from __future__ import annotations

from pathlib import Path

import structlog

from period_gate.domain.errors import RenameError
from period_gate.domain.models import Cadence

logger = structlog.get_logger(__name__)


class LocalFolderRepository:
    def __init__(self, root: Path) -> None:
        self._root = Path(root)

    def folder(self, cadence: Cadence) -> Path:
        for name in (cadence.folder_name, cadence.value):
            candidate = self._root / name
            if candidate.is_dir():
                return candidate
        return self._root / cadence.folder_name

    def list_files(self, cadence: Cadence) -> list[str]:
        folder = self.folder(cadence)
        if not folder.is_dir():
            return []
        return sorted(path.name for path in folder.iterdir() if path.is_file() and path.name.endswith(".csv"))

    def rename(self, cadence: Cadence, original_name: str, final_name: str) -> None:
        folder = self.folder(cadence)
        source = folder / original_name
        target = folder / final_name

        if target.exists():
            raise RenameError(f"Cannot rename: {target} already exists!", file=str(source))
        try:
            source.rename(target)
        except OSError as exc:
            raise RenameError(f"Rename failed: {source} -> {target} ({exc})", file=str(source)) from exc
        logger.debug("renamed_on_disk", source=str(source), target=str(target))
