"""Temporary folders bound to test or group lifecycles."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from tempfolder.config import TempFolderConfig, load_config
from tempfolder.errors import ScopeNestingError, TempFolderStateError
from tempfolder.fs import delete_tree, make_temp_dir
from tempfolder.scope import Scope, ScopeHandle


logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class _Entry:
    path: Path
    handle: ScopeHandle | None = None


class TempFolder:
    """Manages the creation and deletion of temporary files and folders.

    A folder is created whenever a scope of the configured kind is entered and
    removed, including everything inside it, when that scope exits.
    Notifications for the other scope kind are ignored, so a per-test and a
    per-group instance can listen to the same runner side by side.

    Without an explicit ``config``, :func:`~tempfolder.config.load_config` is
    called once per instance.

    Use :meth:`per_test` or :meth:`per_group` to create an instance::

        folder = TempFolder.per_test()
        notifier.register(folder)

        def test_writes_report():
            report = folder.new_file("report.txt")
            ...
    """

    def __init__(self, scope: Scope, config: TempFolderConfig | None = None) -> None:
        self._scope = scope
        self._config = config if config is not None else load_config()
        self._entries: list[_Entry] = []

    @classmethod
    def per_test(cls, config: TempFolderConfig | None = None) -> TempFolder:
        """Set up :attr:`tmp_dir` before each test and clean it up after each test."""
        return cls(Scope.TEST, config)

    @classmethod
    def per_group(cls, config: TempFolderConfig | None = None) -> TempFolder:
        """Set up :attr:`tmp_dir` before each group and clean it up after each group."""
        return cls(Scope.GROUP, config)

    @property
    def scope(self) -> Scope:
        return self._scope

    @property
    def config(self) -> TempFolderConfig:
        return self._config

    @property
    def depth(self) -> int:
        """Number of entered scopes that have not exited yet."""
        return len(self._entries)

    @property
    def active(self) -> bool:
        return bool(self._entries)

    @property
    def tmp_dir(self) -> Path:
        """The folder of the innermost active scope."""
        return self._current("access tmp_dir")

    def current_directory(self) -> Path:
        return self._current("call current_directory")

    def _current(self, action: str) -> Path:
        if not self._entries:
            raise TempFolderStateError(action, self._scope)
        return self._entries[-1].path

    def new_file(self, name: str) -> Path:
        """Create a new empty file with the given ``name`` in the current :attr:`tmp_dir`.

        Raises
        ------
        TempFolderStateError
            If called outside of an active scope.
        FileExistsError
            If an entry with that name already exists.
        """
        path = self._current("call new_file") / name
        path.touch(exist_ok=False)
        return path

    def new_folder(self, name: str) -> Path:
        """Create a new folder with the given ``name`` in the current :attr:`tmp_dir`.

        Missing parent folders are not created.
        """
        path = self._current("call new_folder") / name
        path.mkdir()
        return path

    create_file = new_file
    create_folder = new_folder

    def on_scope_enter(self, target: Scope | ScopeHandle) -> None:
        """Push a fresh folder if ``target`` is of the configured scope kind."""
        scope, handle = _split(target)
        if scope is not self._scope:
            return
        path = make_temp_dir(self._config.prefix, self._config.root)
        self._entries.append(_Entry(path=path, handle=handle))
        logger.debug(
            "Entered %s scope %s (depth %d): %s",
            scope.name,
            handle.name if handle else "<anonymous>",
            len(self._entries),
            path,
        )

    def on_scope_exit(self, target: Scope | ScopeHandle) -> None:
        """Pop and delete the innermost folder if ``target`` is of the configured scope kind.

        Deletion errors propagate; the folder is popped beforehand, so the
        stack stays balanced even when files are left behind.
        """
        scope, handle = _split(target)
        if scope is not self._scope:
            return
        if not self._entries:
            raise ScopeNestingError(scope, None, handle)

        top = self._entries[-1]
        if handle is not None and top.handle is not None and handle != top.handle:
            if self._config.strict_nesting:
                raise ScopeNestingError(scope, top.handle, handle)
            logger.warning(
                "Exit of %s scope %r does not match innermost scope %r, deleting %s anyway",
                scope.name,
                handle.name,
                top.handle.name,
                top.path,
            )

        self._entries.pop()
        delete_tree(top.path)

    def before_execute_test(self, test: ScopeHandle) -> None:
        self.on_scope_enter(_as_handle(test, Scope.TEST))

    def after_execute_test(self, test: ScopeHandle) -> None:
        self.on_scope_exit(_as_handle(test, Scope.TEST))

    def before_execute_group(self, group: ScopeHandle) -> None:
        self.on_scope_enter(_as_handle(group, Scope.GROUP))

    def after_execute_group(self, group: ScopeHandle) -> None:
        self.on_scope_exit(_as_handle(group, Scope.GROUP))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(scope={self._scope.name}, depth={self.depth})"


def _split(target: Scope | ScopeHandle) -> tuple[Scope, ScopeHandle | None]:
    if isinstance(target, ScopeHandle):
        return target.scope, target
    return target, None


def _as_handle(handle: object, scope: Scope) -> Scope | ScopeHandle:
    # Runners may pass their own objects; only ScopeHandles take part in nesting checks
    if isinstance(handle, ScopeHandle) and handle.scope is scope:
        return handle
    return scope


__all__ = ["TempFolder"]
