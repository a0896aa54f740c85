"""Sources for the files already committed to the main line."""
from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Callable, Iterable, Mapping, Sequence

import structlog

from period_gate.domain.errors import EnvironmentFault
from period_gate.domain.models import Cadence

logger = structlog.get_logger(__name__)

Runner = Callable[..., subprocess.CompletedProcess]


class StaticCommittedArchive:
    """Committed files and blocked folders known up front."""

    def __init__(
        self,
        files: Mapping[Cadence, Sequence[str]] | None = None,
        blocked: Iterable[Cadence] = (),
    ) -> None:
        self._files = {cadence: tuple(names) for cadence, names in (files or {}).items()}
        self._blocked = frozenset(blocked)

    def list_files(self, cadence: Cadence) -> Sequence[str]:
        return self._files.get(cadence, ())

    def has_open_change_request(self, cadence: Cadence) -> bool:
        return cadence in self._blocked


class GitCommittedArchive:
    """Reads committed cadence folders from a git ref with ``git ls-tree``.

    Open change requests live on the hosting service, not in git, so the
    folders they block are passed in by the caller.
    """

    def __init__(
        self,
        repo_root: Path,
        ref: str,
        folders: Mapping[Cadence, str] | None = None,
        blocked: Iterable[Cadence] = (),
        runner: Runner = subprocess.run,
    ) -> None:
        self._repo_root = Path(repo_root)
        self._ref = ref
        self._folders = dict(folders or {})
        self._blocked = frozenset(blocked)
        self._runner = runner
        self._cache: dict[Cadence, tuple[str, ...]] = {}

    def list_files(self, cadence: Cadence) -> Sequence[str]:
        if cadence not in self._cache:
            self._cache[cadence] = self._ls_tree(cadence)
        return self._cache[cadence]

    def has_open_change_request(self, cadence: Cadence) -> bool:
        return cadence in self._blocked

    def _ls_tree(self, cadence: Cadence) -> tuple[str, ...]:
        folder = self._folders.get(cadence, cadence.folder_name)
        cmd = ["git", "ls-tree", "--name-only", self._ref, "--", f"{folder}/"]
        try:
            proc = self._runner(cmd, cwd=self._repo_root, text=True, capture_output=True, check=False)
        except OSError as exc:
            raise EnvironmentFault(f"Cannot run git to list committed files: {exc}") from exc
        if proc.returncode != 0:
            raise EnvironmentFault(
                f"Cannot list committed files of '{folder}' at '{self._ref}': {proc.stderr.strip()}"
            )
        names = tuple(line.strip().rsplit("/", 1)[-1] for line in proc.stdout.splitlines() if line.strip())
        logger.debug("committed_files_listed", folder=folder, ref=self._ref, count=len(names))
        return names
