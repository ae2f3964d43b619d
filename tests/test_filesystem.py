from __future__ import annotations

from pathlib import Path

import pytest

from local_mw.core.types import RepositoryKind, ScanBatch
from local_mw.utils.filesystem import (
    count_directories,
    is_mediawiki_directory,
    list_subdirectories,
    resolve_target_path,
)

from conftest import make_mediawiki


def test_list_subdirectories_sorted_and_dirs_only(tmp_path: Path) -> None:
    (tmp_path / "Zeta").mkdir()
    (tmp_path / "Alpha").mkdir()
    (tmp_path / "README").write_text("not a directory")
    assert list_subdirectories(str(tmp_path)) == [
        str(tmp_path / "Alpha"),
        str(tmp_path / "Zeta"),
    ]
    assert count_directories(str(tmp_path)) == 2


def test_missing_or_file_input_is_empty(tmp_path: Path) -> None:
    (tmp_path / "file.txt").write_text("x")
    assert list_subdirectories(str(tmp_path / "missing")) == []
    assert list_subdirectories(str(tmp_path / "file.txt")) == []
    assert count_directories(str(tmp_path / "missing")) == 0


def test_batch_from_directory(tmp_path: Path) -> None:
    root = make_mediawiki(tmp_path / "mw", extensions=["Cite", "Babel"])
    batch = ScanBatch.from_directory(str(root / "extensions"), RepositoryKind.EXTENSION)
    assert [Path(target.path).name for target in batch] == ["Babel", "Cite"]
    assert all(target.kind == RepositoryKind.EXTENSION for target in batch)


def test_mediawiki_layout(tmp_path: Path) -> None:
    root = make_mediawiki(tmp_path / "mw")
    assert is_mediawiki_directory(str(root))
    (root / "api.php").unlink()
    assert not is_mediawiki_directory(str(root))
    assert not is_mediawiki_directory(str(tmp_path / "nowhere"))


def test_resolve_target_path() -> None:
    assert resolve_target_path("/mw", RepositoryKind.CORE) == "/mw"
    assert resolve_target_path("/mw", RepositoryKind.EXTENSION, "Cite") == "/mw/extensions/Cite"
    assert resolve_target_path("/mw", RepositoryKind.SKIN, "Vector") == "/mw/skins/Vector"
    with pytest.raises(ValueError):
        resolve_target_path("/mw", RepositoryKind.SKIN)
