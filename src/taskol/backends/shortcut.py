"""ShortcutBackend: Windows .lnk files written through winshell."""

from pathlib import Path

try:
    import pywintypes
    import winshell
except ImportError:  # pywin32 only installs on Windows
    pywintypes = None
    winshell = None

from .base import LinkBackend, LinkError


def _shortcut_errors() -> tuple:
    if pywintypes is None:
        return (OSError,)
    return (OSError, pywintypes.error, pywintypes.com_error)


class ShortcutBackend(LinkBackend):
    """Backend producing Explorer shortcuts. Only works on Windows."""

    @property
    def name(self) -> str:
        return "shortcut"

    @property
    def extension(self) -> str:
        return ".lnk"

    def create(self, target: Path, link_path: Path) -> None:
        if winshell is None:
            raise LinkError("winshell is not installed; .lnk shortcuts can only be made on Windows")

        try:
            with winshell.shortcut(str(link_path)) as link:
                link.path = str(target)
        except _shortcut_errors() as e:
            raise LinkError(f"Failed to write shortcut {link_path}: {e}") from e

    def is_link(self, path: Path) -> bool:
        return path.suffix.lower() == self.extension and not path.is_dir()
