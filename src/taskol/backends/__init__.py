"""Link backends: how a link file is materialized on the host OS."""

from typing import Optional

from taskol.config import ConfigError, default_backend_name

from .base import LinkBackend, LinkError
from .shortcut import ShortcutBackend
from .symlink import SymlinkBackend

BACKENDS = {
    'shortcut': ShortcutBackend,
    'symlink': SymlinkBackend,
}


def get_backend(name: Optional[str] = None) -> LinkBackend:
    """
    Instantiate a backend by name.

    Args:
        name: 'shortcut' or 'symlink' (default depends on the platform)

    Raises:
        ConfigError: If the name is unknown
    """
    if name is None:
        name = default_backend_name()

    try:
        backend_class = BACKENDS[name]
    except KeyError:
        valid = ", ".join(sorted(BACKENDS))
        raise ConfigError(f"Unknown link backend '{name}' (valid: {valid})") from None

    return backend_class()


__all__ = ["LinkBackend", "LinkError", "ShortcutBackend", "SymlinkBackend", "BACKENDS", "get_backend"]
