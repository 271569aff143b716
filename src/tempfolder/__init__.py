"""tempfolder - temporary folders scoped to test and group lifecycles."""

from .config import DEFAULT_CONFIG, TempFolderConfig, load_config
from .errors import ScopeNestingError, TempFolderConfigError, TempFolderStateError
from .folder import TempFolder
from .lifecycle import LifecycleListener, LifecycleNotifier, running_group, running_test
from .scope import Scope, ScopeHandle
from .version import __version__


__all__ = [
    # Core
    "TempFolder",
    "Scope",
    "ScopeHandle",
    # Lifecycle
    "LifecycleListener",
    "LifecycleNotifier",
    "running_test",
    "running_group",
    # Config
    "TempFolderConfig",
    "DEFAULT_CONFIG",
    "load_config",
    # Errors
    "TempFolderStateError",
    "ScopeNestingError",
    "TempFolderConfigError",
]
