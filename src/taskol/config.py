"""Lightweight configuration loader for taskol.

Reads optional settings from ~/.taskol/config.yaml with safe defaults.

Supported keys:
- target: root directory holding project folders (no default)
- link: directory where links are created (no default)
- format: link name template (default: ':tdate:_:pabb:_:tname:')
- ignores: characters; names starting with any of them are skipped (default: '!#@')
- backend: link flavour - 'shortcut' or 'symlink' (default: 'shortcut' on Windows, else 'symlink')
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional
import yaml

from taskol.link_format import DEFAULT_FORMAT

_CONFIG_CACHE: Optional[Dict[str, Any]] = None

DEFAULT_IGNORES = '!#@'


class ConfigError(Exception):
    """Raised when settings are missing or invalid. Always fatal."""
    pass


@dataclass(frozen=True)
class SyncSettings:
    """Validated settings for one sync run."""

    target_dir: Path
    link_dir: Path
    link_format: str
    ignores: str
    backend: str


def default_backend_name() -> str:
    return 'shortcut' if os.name == 'nt' else 'symlink'


def _defaults() -> Dict[str, Any]:
    return {
        'target': None,
        'link': None,
        'format': DEFAULT_FORMAT,
        'ignores': DEFAULT_IGNORES,
        'backend': default_backend_name(),
    }


def get_config_path() -> Path:
    return Path.home() / '.taskol' / 'config.yaml'


def get_config() -> Dict[str, Any]:
    """Load config.yaml once and cache the result."""
    global _CONFIG_CACHE
    if _CONFIG_CACHE is not None:
        return _CONFIG_CACHE

    cfg_path = get_config_path()
    data: Dict[str, Any] = {}
    if cfg_path.exists():
        try:
            loaded = yaml.safe_load(cfg_path.read_text(encoding='utf-8'))
            if isinstance(loaded, dict):
                data = loaded
        except (yaml.YAMLError, OSError):
            # Malformed or unreadable config; fall back to defaults
            data = {}

    merged = {**_defaults(), **data}
    _CONFIG_CACHE = merged
    return merged


def _pick(key: str, cli_value: Optional[str]) -> Optional[str]:
    """Priority: CLI option > config file > default."""
    if cli_value is not None:
        return cli_value
    value = get_config().get(key, _defaults()[key])
    return None if value is None else str(value)


def resolve_settings(
    target: Optional[str] = None,
    link: Optional[str] = None,
    link_format: Optional[str] = None,
    ignores: Optional[str] = None,
    backend: Optional[str] = None,
) -> SyncSettings:
    """
    Merge CLI values with config.yaml and validate the result.

    Validation happens here, before anything on disk is touched.

    Args:
        target: --target value
        link: --link value
        link_format: --format value
        ignores: --ignores value
        backend: --backend value

    Returns:
        SyncSettings

    Raises:
        ConfigError: target/link missing, empty format, or target not a directory
    """
    target_value = _pick('target', target)
    link_value = _pick('link', link)
    format_value = _pick('format', link_format)
    ignores_value = _pick('ignores', ignores)
    backend_value = _pick('backend', backend)

    if not target_value:
        raise ConfigError("Target directory not specified (--target)")
    if not link_value:
        raise ConfigError("Link directory not specified (--link)")
    if not format_value:
        raise ConfigError("Link name format is empty (--format)")

    target_dir = Path(target_value).expanduser()
    if not target_dir.is_dir():
        raise ConfigError(f"Target directory does not exist: {target_dir}")

    link_dir = Path(link_value).expanduser()
    if link_dir.exists() and not link_dir.is_dir():
        raise ConfigError(f"Link path is not a directory: {link_dir}")

    return SyncSettings(
        target_dir=target_dir,
        link_dir=link_dir,
        link_format=format_value,
        ignores=ignores_value or '',
        backend=backend_value or default_backend_name(),
    )
