"""Lifecycle notifications exchanged with the hosting test runner.

The runner is an external collaborator: it either calls the
:class:`LifecycleListener` hooks on each listener directly, or hands the
listeners to a :class:`LifecycleNotifier` and reports scope boundaries there.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Protocol, runtime_checkable

from tempfolder.scope import ScopeHandle


logger = logging.getLogger(__name__)


@runtime_checkable
class LifecycleListener(Protocol):
    """Protocol for components reacting to test and group boundaries."""

    def before_execute_test(self, test: ScopeHandle) -> None:
        """Called before a single test runs."""
        ...

    def after_execute_test(self, test: ScopeHandle) -> None:
        """Called after a single test finished, whatever its outcome."""
        ...

    def before_execute_group(self, group: ScopeHandle) -> None:
        """Called before the first test of a group runs."""
        ...

    def after_execute_group(self, group: ScopeHandle) -> None:
        """Called after the last test of a group finished."""
        ...


class LifecycleNotifier:
    """Fans lifecycle notifications out to registered listeners.

    Enter notifications reach listeners in registration order, exit
    notifications in reverse order.
    """

    def __init__(self, listeners: list[LifecycleListener] | None = None) -> None:
        self._listeners: list[LifecycleListener] = []
        for listener in listeners or []:
            self.register(listener)

    @property
    def listeners(self) -> list[LifecycleListener]:
        return list(self._listeners)

    def register(self, listener: LifecycleListener) -> LifecycleListener:
        if not isinstance(listener, LifecycleListener):
            msg = f"{type(listener).__name__} does not implement LifecycleListener"
            raise TypeError(msg)
        self._listeners.append(listener)
        return listener

    def test_entered(self, test: ScopeHandle) -> None:
        self._notify_enter(test, "before_execute_test", "after_execute_test")

    def test_exited(self, test: ScopeHandle) -> None:
        self._notify_exit(test, "after_execute_test")

    def group_entered(self, group: ScopeHandle) -> None:
        self._notify_enter(group, "before_execute_group", "after_execute_group")

    def group_exited(self, group: ScopeHandle) -> None:
        self._notify_exit(group, "after_execute_group")

    def _notify_enter(self, handle: ScopeHandle, hook: str, undo_hook: str) -> None:
        """Notify listeners in order; on failure, exit the ones already entered."""
        entered: list[LifecycleListener] = []
        for listener in self._listeners:
            try:
                getattr(listener, hook)(handle)
            except Exception:
                for done in reversed(entered):
                    try:
                        getattr(done, undo_hook)(handle)
                    except Exception as e:
                        logger.error("%s failed for %s: %s", undo_hook, handle.name, e)
                raise
            entered.append(listener)

    def _notify_exit(self, handle: ScopeHandle, hook: str) -> None:
        """Notify every listener, then re-raise the first failure."""
        first_error: Exception | None = None
        for listener in reversed(self._listeners):
            try:
                getattr(listener, hook)(handle)
            except Exception as e:
                if first_error is None:
                    first_error = e
                else:
                    logger.error("%s failed for %s: %s", hook, handle.name, e)
        if first_error is not None:
            raise first_error


@contextmanager
def running_test(notifier: LifecycleNotifier, name: str) -> Iterator[ScopeHandle]:
    """Report a test boundary around the enclosed block."""
    handle = ScopeHandle.test(name)
    notifier.test_entered(handle)
    try:
        yield handle
    finally:
        notifier.test_exited(handle)


@contextmanager
def running_group(notifier: LifecycleNotifier, name: str) -> Iterator[ScopeHandle]:
    """Report a group boundary around the enclosed block."""
    handle = ScopeHandle.group(name)
    notifier.group_entered(handle)
    try:
        yield handle
    finally:
        notifier.group_exited(handle)


__all__ = ["LifecycleListener", "LifecycleNotifier", "running_group", "running_test"]
