"""Lifecycle scopes a temporary folder can be bound to."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Scope(Enum):
    """Kind of lifecycle window a :class:`~tempfolder.folder.TempFolder` follows."""

    TEST = "test"
    GROUP = "group"


@dataclass(frozen=True, slots=True)
class ScopeHandle:
    """Identifies a single test or group passed along with lifecycle notifications.

    Attributes
    ----------
    name
        Display name of the test or group (e.g., function or class name).
    scope
        Whether the handle denotes a test or a group.
    """

    name: str
    scope: Scope

    @classmethod
    def test(cls, name: str) -> ScopeHandle:
        return cls(name=name, scope=Scope.TEST)

    @classmethod
    def group(cls, name: str) -> ScopeHandle:
        return cls(name=name, scope=Scope.GROUP)
