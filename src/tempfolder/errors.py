"""Error types for temporary folder management."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tempfolder.scope import Scope, ScopeHandle


class TempFolderStateError(RuntimeError):
    """Raised when a folder operation is used outside of an active scope."""

    def __init__(self, action: str, scope: Scope) -> None:
        self.action = action
        self.scope = scope
        super().__init__(
            f"You tried to {action} but you cannot use TempFolder outside of a {scope.name} scope."
        )


class ScopeNestingError(RuntimeError):
    """Raised when lifecycle notifications are not well nested."""

    def __init__(
        self,
        scope: Scope,
        expected: ScopeHandle | None,
        received: ScopeHandle | None,
    ) -> None:
        self.scope = scope
        self.expected = expected
        self.received = received

        if expected is None:
            message = f"Exit of {scope.name} scope received without a matching enter."
        else:
            message = (
                f"Exit of {scope.name} scope out of order: "
                f"innermost active is {expected.name!r}, got {getattr(received, 'name', None)!r}."
            )
        super().__init__(message)


class TempFolderConfigError(ValueError):
    """Raised when tempfolder configuration is invalid."""
