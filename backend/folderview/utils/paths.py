"""Root-anchored path algebra: resolution, containment and navigation."""

from __future__ import annotations

import logging
import os

from folderview.exceptions import AccessDenied

logger = logging.getLogger(__name__)


class PathResolver:
    """Maps root-relative paths ("/a/b") to absolute paths under a fixed root.

    Pure string work: nothing here touches the filesystem, so callers stat
    the result themselves.
    """

    def __init__(self, root: str):
        self._root = os.path.normpath(os.path.abspath(root))
        # "/" and "C:\" already end with a separator
        if self._root.endswith(os.sep):
            self._root_prefix = self._root
        else:
            self._root_prefix = self._root + os.sep

    @property
    def root(self) -> str:
        return self._root

    def resolve(self, requested: str | None) -> str:
        """Resolve *requested* against the root.

        Raises AccessDenied when the normalized result leaves the root.
        """
        if not requested:
            return self._root

        relative = requested[1:] if requested.startswith("/") else requested
        resolved = os.path.normpath(os.path.join(self._root, relative))

        if not self.contains(resolved):
            logger.warning(
                "Path escapes root: resolved=%s root=%s (requested %r)",
                resolved, self._root, requested,
            )
            raise AccessDenied()
        return resolved

    def contains(self, absolute: str) -> bool:
        """True if the normalized *absolute* path is the root or below it."""
        return absolute == self._root or absolute.startswith(self._root_prefix)

    def to_relative(self, absolute: str) -> str:
        """Convert an absolute path under the root to its "/"-anchored form."""
        absolute = os.path.normpath(absolute)
        if absolute == self._root:
            return "/"
        relative = os.path.relpath(absolute, self._root)
        return "/" + relative.replace("\\", "/")

    def parent_of(self, absolute: str) -> str:
        return os.path.dirname(os.path.normpath(absolute))

    def can_go_up(self, absolute: str) -> bool:
        """Whether navigating to the parent of *absolute* stays inside the root."""
        current = os.path.normpath(absolute)
        parent = self.parent_of(current)
        is_fs_root = parent == current
        return current != self._root and self.contains(parent) and not is_fs_root

    def parent_relative(self, absolute: str) -> str:
        """Relative path of the parent, clamped to "/" at the root."""
        if not self.can_go_up(absolute):
            return "/"
        return self.to_relative(self.parent_of(absolute))
