"""Read-only access to the bundled template tree.

The tree ships inside the package under ``scaffolder/templates/ddd`` and is
read through :mod:`importlib.resources`, so it works the same from a source
checkout, a wheel, or a zip import.  Any object implementing the
``Traversable`` interface can stand in for the bundled root, which lets tests
point the scaffolder at a tree built under ``tmp_path``.
"""

from __future__ import annotations

from importlib.resources.abc import Traversable
from importlib.resources import files

from .errors import TemplateSourceError

SKELETON_ROOT = "skeleton"
CONTEXT_ROOT = "context"

_BUNDLED_PACKAGE = "dddscaffold.scaffolder"
_BUNDLED_PREFIX = ("templates", "ddd")


class TemplateSource:
    """An immutable template tree with named logical roots.

    Constructed once at process start and handed to the builder, the appender
    and the materializer.  Nothing here writes to the tree.
    """

    def __init__(self, root: Traversable) -> None:
        self._root = root

    @classmethod
    def bundled(cls) -> "TemplateSource":
        """Return the template tree shipped with the package."""
        return cls(files(_BUNDLED_PACKAGE).joinpath(*_BUNDLED_PREFIX))

    @property
    def root(self) -> Traversable:
        return self._root

    def subtree(self, name: str) -> Traversable:
        """Return the node for the logical root *name* (e.g. ``"skeleton"``)."""
        node = self._root.joinpath(*name.split("/"))
        if not node.is_dir():
            raise TemplateSourceError(f"template root not found: {name}")
        return node

    @staticmethod
    def entries(node: Traversable) -> list[Traversable]:
        """Children of a directory node, sorted by name."""
        return sorted(node.iterdir(), key=lambda entry: entry.name)

    def list_files(self, name: str) -> list[str]:
        """Return slash-separated paths of every file under root *name*."""
        found: list[str] = []

        def _walk(node: Traversable, prefix: str) -> None:
            for entry in self.entries(node):
                logical = f"{prefix}/{entry.name}" if prefix else entry.name
                if entry.is_dir():
                    _walk(entry, logical)
                else:
                    found.append(logical)

        _walk(self.subtree(name), "")
        return found
