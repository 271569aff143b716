"""Configuration for tempfolder, read from pyproject.toml and the environment."""

from __future__ import annotations

import functools
import os
import tomllib
from pathlib import Path
from typing import Any

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from tempfolder.errors import TempFolderConfigError


ENV_PREFIX = "TEMPFOLDER_"
_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


class TempFolderConfig(BaseModel):
    """Settings shared by every :class:`~tempfolder.folder.TempFolder`."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    prefix: str = Field(
        default="tempfolder",
        description="Name prefix of every created temporary folder",
    )
    root: Path | None = Field(
        default=None,
        description="Directory the folders are created in; platform temp dir when unset",
    )
    strict_nesting: bool = Field(
        default=True,
        description="Reject scope exits that do not match the innermost entered scope",
    )

    @field_validator("prefix")
    @classmethod
    def _check_prefix(cls, value: str) -> str:
        if not value:
            raise ValueError("prefix must not be empty")
        if os.sep in value or (os.altsep and os.altsep in value):
            raise ValueError(f"prefix must not contain path separators, got {value!r}")
        return value


DEFAULT_CONFIG = TempFolderConfig()


def find_project_root(start: Path | None = None) -> Path | None:
    """Return the nearest directory at or above ``start`` holding a pyproject.toml."""
    current = (start or Path.cwd()).resolve()
    for candidate in (current, *current.parents):
        if (candidate / "pyproject.toml").is_file():
            return candidate
    return None


def _read_pyproject(project_root: Path | None) -> dict[str, Any]:
    if project_root is None:
        return {}
    pyproject = project_root / "pyproject.toml"
    try:
        with pyproject.open("rb") as fh:
            data = tomllib.load(fh)
    except tomllib.TOMLDecodeError as e:
        raise TempFolderConfigError(f"Invalid {pyproject}: {e}") from e
    tool = data.get("tool", {})
    section = tool.get("tempfolder", {}) if isinstance(tool, dict) else {}
    if not isinstance(section, dict):
        raise TempFolderConfigError("[tool.tempfolder] must be a table")
    section = dict(section)
    # Relative roots are anchored at the project, not the working directory
    if isinstance(section.get("root"), str) and section["root"]:
        section["root"] = project_root / section["root"]
    return section


def _parse_bool(name: str, raw: str) -> bool:
    lowered = raw.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise TempFolderConfigError(f"{name} must be a boolean, got {raw!r}")


def _read_env() -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    if prefix := os.environ.get(f"{ENV_PREFIX}PREFIX"):
        overrides["prefix"] = prefix
    if root := os.environ.get(f"{ENV_PREFIX}ROOT"):
        overrides["root"] = Path(root)
    strict = os.environ.get(f"{ENV_PREFIX}STRICT_NESTING")
    if strict is not None:
        overrides["strict_nesting"] = _parse_bool(f"{ENV_PREFIX}STRICT_NESTING", strict)
    return overrides


@functools.cache
def _load_dotenv_once() -> None:
    load_dotenv(find_dotenv(usecwd=True))


def load_config(start: Path | None = None) -> TempFolderConfig:
    """Load configuration.

    Values from ``[tool.tempfolder]`` in the nearest pyproject.toml are
    overridden by ``TEMPFOLDER_*`` environment variables (a ``.env`` file is
    honored).

    The ``.env`` file is read into ``os.environ`` on the first call only;
    variables already set in the environment are never overwritten.
    """
    _load_dotenv_once()
    values = _read_pyproject(find_project_root(start))
    values.update(_read_env())
    try:
        return TempFolderConfig(**values)
    except ValidationError as e:
        raise TempFolderConfigError(str(e)) from e


__all__ = ["DEFAULT_CONFIG", "TempFolderConfig", "find_project_root", "load_config"]
