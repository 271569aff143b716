"""Shared fixtures for unit tests."""

from pathlib import Path

import pytest

from tempfolder.config import TempFolderConfig


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep TEMPFOLDER_* variables of the developer's shell out of the tests."""
    for name in ("TEMPFOLDER_PREFIX", "TEMPFOLDER_ROOT", "TEMPFOLDER_STRICT_NESTING"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def temp_root(tmp_path: Path) -> Path:
    """Directory that receives every folder created during a test."""
    root = tmp_path / "root"
    root.mkdir()
    return root


@pytest.fixture
def config(temp_root: Path) -> TempFolderConfig:
    return TempFolderConfig(prefix="tf-", root=temp_root)


@pytest.fixture
def lenient_config(temp_root: Path) -> TempFolderConfig:
    return TempFolderConfig(prefix="tf-", root=temp_root, strict_nesting=False)


@pytest.fixture
def calls() -> list[tuple[str, str, str]]:
    return []
