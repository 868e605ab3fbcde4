"""SymlinkBackend: plain symbolic links to task folders."""

import os
from pathlib import Path

from .base import LinkBackend, LinkError


class SymlinkBackend(LinkBackend):
    """Backend producing directory symlinks (the default outside Windows)."""

    @property
    def name(self) -> str:
        return "symlink"

    @property
    def extension(self) -> str:
        return ""

    def create(self, target: Path, link_path: Path) -> None:
        try:
            os.symlink(target, link_path, target_is_directory=True)
        except OSError as e:
            raise LinkError(f"Failed to create symlink {link_path}: {e}") from e

    def is_link(self, path: Path) -> bool:
        # Only symlinks are ours; regular files in the link dir are left alone
        return path.is_symlink()
