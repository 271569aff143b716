"""Tests for tempfolder.config module."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from tempfolder.config import (
    DEFAULT_CONFIG,
    TempFolderConfig,
    _load_dotenv_once,
    find_project_root,
    load_config,
)
from tempfolder.errors import TempFolderConfigError


def write_pyproject(directory: Path, body: str) -> Path:
    path = directory / "pyproject.toml"
    path.write_text(body, encoding="utf-8")
    return path


def test_defaults():
    assert DEFAULT_CONFIG.prefix == "tempfolder"
    assert DEFAULT_CONFIG.root is None
    assert DEFAULT_CONFIG.strict_nesting is True


@pytest.mark.parametrize("prefix", ["", "a/b"])
def test_prefix_validation(prefix: str):
    with pytest.raises(ValidationError):
        TempFolderConfig(prefix=prefix)


def test_config_is_frozen():
    with pytest.raises(ValidationError):
        DEFAULT_CONFIG.prefix = "other"


def test_find_project_root_walks_up(tmp_path: Path):
    write_pyproject(tmp_path, "")
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)

    assert find_project_root(nested) == tmp_path.resolve()


class TestLoadConfig:
    """Tests for load_config function."""

    @pytest.fixture(autouse=True)
    def isolated_cwd(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)

    def test_without_pyproject_uses_defaults(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setattr("tempfolder.config.find_project_root", lambda start=None: None)

        assert load_config(tmp_path) == DEFAULT_CONFIG

    def test_reads_tool_section(self, tmp_path: Path):
        write_pyproject(
            tmp_path,
            '[tool.tempfolder]\nprefix = "suite-"\nroot = "build/tmp"\nstrict_nesting = false\n',
        )

        config = load_config(tmp_path)

        assert config.prefix == "suite-"
        assert config.root == tmp_path.resolve() / "build" / "tmp"
        assert config.strict_nesting is False

    def test_environment_overrides_pyproject(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ):
        write_pyproject(tmp_path, '[tool.tempfolder]\nprefix = "suite-"\n')
        monkeypatch.setenv("TEMPFOLDER_PREFIX", "env-")
        monkeypatch.setenv("TEMPFOLDER_ROOT", str(tmp_path / "env-root"))
        monkeypatch.setenv("TEMPFOLDER_STRICT_NESTING", "off")

        config = load_config(tmp_path)

        assert config.prefix == "env-"
        assert config.root == tmp_path / "env-root"
        assert config.strict_nesting is False

    def test_invalid_boolean_raises(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        write_pyproject(tmp_path, "")
        monkeypatch.setenv("TEMPFOLDER_STRICT_NESTING", "maybe")

        with pytest.raises(TempFolderConfigError, match="must be a boolean"):
            load_config(tmp_path)

    def test_unknown_key_raises(self, tmp_path: Path):
        write_pyproject(tmp_path, '[tool.tempfolder]\ncolour = "blue"\n')

        with pytest.raises(TempFolderConfigError):
            load_config(tmp_path)

    def test_invalid_prefix_raises(self, tmp_path: Path):
        write_pyproject(tmp_path, '[tool.tempfolder]\nprefix = ""\n')

        with pytest.raises(TempFolderConfigError):
            load_config(tmp_path)

    def test_malformed_pyproject_raises(self, tmp_path: Path):
        write_pyproject(tmp_path, "[tool.tempfolder\nprefix = \n")

        with pytest.raises(TempFolderConfigError, match="Invalid"):
            load_config(tmp_path)

    def test_non_string_root_raises(self, tmp_path: Path):
        write_pyproject(tmp_path, "[tool.tempfolder]\nroot = 5\n")

        with pytest.raises(TempFolderConfigError):
            load_config(tmp_path)

    def test_dotenv_read_once(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        write_pyproject(tmp_path, "")
        loads = []
        monkeypatch.setattr("tempfolder.config.load_dotenv", lambda path: loads.append(path))
        _load_dotenv_once.cache_clear()

        load_config(tmp_path)
        load_config(tmp_path)

        assert len(loads) == 1
        _load_dotenv_once.cache_clear()
