"""Abstract base class for link backends (Windows shortcuts, symlinks)."""

from abc import ABC, abstractmethod
from pathlib import Path


class LinkError(Exception):
    """Raised when a link cannot be created or removed."""
    pass


class LinkBackend(ABC):
    """
    Interface every link flavour implements.

    A backend owns one kind of link file in the link directory: it creates
    them, recognises them among other directory entries, and removes them.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Backend name as used in config and on the command line."""
        pass

    @property
    @abstractmethod
    def extension(self) -> str:
        """
        Suffix appended to formatted link names.

        Example:
            For shortcuts: ".lnk"
            For symlinks: ""
        """
        pass

    @property
    def glob_pattern(self) -> str:
        """Pattern used to enumerate candidate link files in the link directory."""
        return f"*{self.extension}"

    @abstractmethod
    def create(self, target: Path, link_path: Path) -> None:
        """
        Create a link at link_path that resolves to target.

        Args:
            target: Task folder the link points at
            link_path: Full path of the link file (extension included)

        Raises:
            LinkError: If the link could not be created
        """
        pass

    @abstractmethod
    def is_link(self, path: Path) -> bool:
        """Check whether a directory entry is a link file of this backend."""
        pass

    def remove(self, link_path: Path) -> None:
        """
        Delete a link file.

        Raises:
            LinkError: If the file could not be removed
        """
        try:
            link_path.unlink()
        except OSError as e:
            raise LinkError(f"Failed to remove {link_path}: {e}") from e
