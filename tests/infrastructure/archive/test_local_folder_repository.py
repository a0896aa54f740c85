from pathlib import Path

import pytest

from period_gate.domain.errors import RenameError
from period_gate.domain.models import Cadence
from period_gate.infrastructure.archive.local_folder import LocalFolderRepository


@pytest.fixture
def repo(tmp_path: Path) -> LocalFolderRepository:
    daily = tmp_path / "Daily"
    daily.mkdir()
    (daily / "2025 14_day Mar.csv").write_text("a,b\n1,2\n")
    (daily / "3 2025 13_day Mar.csv").write_text("a,b\n")
    (daily / "README.md").write_text("notes")
    return LocalFolderRepository(tmp_path)


def test_lists_only_csv_files_sorted(repo: LocalFolderRepository) -> None:
    assert repo.list_files(Cadence.DAILY) == ["2025 14_day Mar.csv", "3 2025 13_day Mar.csv"]


def test_missing_folder_lists_nothing(repo: LocalFolderRepository) -> None:
    assert repo.list_files(Cadence.YEARLY) == []


def test_lowercase_folder_is_found(tmp_path: Path) -> None:
    (tmp_path / "weekly").mkdir()
    (tmp_path / "weekly" / "holdings.csv").write_text("x\n")

    repo = LocalFolderRepository(tmp_path)

    assert repo.folder(Cadence.WEEKLY) == tmp_path / "weekly"
    assert repo.list_files(Cadence.WEEKLY) == ["holdings.csv"]


def test_rename_moves_file(repo: LocalFolderRepository, tmp_path: Path) -> None:
    repo.rename(Cadence.DAILY, "2025 14_day Mar.csv", "4 2025 14_day Mar.csv")

    assert (tmp_path / "Daily" / "4 2025 14_day Mar.csv").read_text() == "a,b\n1,2\n"
    assert not (tmp_path / "Daily" / "2025 14_day Mar.csv").exists()


def test_rename_refuses_to_overwrite(repo: LocalFolderRepository, tmp_path: Path) -> None:
    with pytest.raises(RenameError) as excinfo:
        repo.rename(Cadence.DAILY, "2025 14_day Mar.csv", "3 2025 13_day Mar.csv")

    assert "already exists" in excinfo.value.message
    assert (tmp_path / "Daily" / "2025 14_day Mar.csv").exists()


def test_rename_of_missing_source_fails(repo: LocalFolderRepository) -> None:
    with pytest.raises(RenameError) as excinfo:
        repo.rename(Cadence.DAILY, "2025 12_day Mar.csv", "5 2025 12_day Mar.csv")

    assert excinfo.value.message.startswith("Rename failed")
