"""Filesystem helpers used on the node when staging and publishing volumes."""

from __future__ import annotations

import os
from collections.abc import Iterable
from typing import Any


class NodeMounter:
    """Creates mount targets and inspects mount points on the node."""

    def make_file(self, pathname: str) -> None:
        """Create an empty file if it does not already exist."""
        fd = os.open(pathname, os.O_CREAT, 0o644)
        os.close(fd)

    def make_dir(self, pathname: str) -> None:
        """Create a directory and its parents, accepting one that exists."""
        os.makedirs(pathname, mode=0o755, exist_ok=True)

    def exists_path(self, pathname: str) -> bool:
        """Return whether the path exists, following symlinks.

        Errors other than a missing path are raised.
        """
        try:
            os.stat(pathname)
        except FileNotFoundError:
            return False
        return True

    def get_device_name(self, mount_path: str, mounts: Iterable[Any]) -> tuple[str, int]:
        """Return the device mounted at a path and how many mounts use it.

        ``mounts`` holds entries with ``path`` and ``device`` attributes.
        A symlinked mount path is resolved first.
        """
        entries = list(mounts)
        try:
            target = os.path.realpath(mount_path, strict=True)
        except OSError:
            target = mount_path
        device = next((entry.device for entry in entries if entry.path == target), "")
        ref_count = sum(1 for entry in entries if entry.device == device)
        return device, ref_count