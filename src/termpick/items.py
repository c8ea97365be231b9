"""Item capability contracts and ready-made item types.

Flat pickers only need a display name; plain strings qualify as-is. Tree
navigation additionally needs to know whether an item may have children,
how to load them, whether the item can be chosen on its own, and optional
metadata used to decorate the header.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Generic, Protocol, Sequence, TypeVar, runtime_checkable

logger = logging.getLogger(__name__)

T = TypeVar("T")


@runtime_checkable
class Displayable(Protocol):
    """Anything with a ``display_name`` can be shown in a picker."""

    @property
    def display_name(self) -> str: ...


@dataclass
class TreeNodeMetadata:
    """Optional header decoration for a tree item."""

    subtitle: str | None = None
    detail_lines: list[str] = field(default_factory=list)
    icon: str | None = None


@runtime_checkable
class TreeItem(Protocol):
    """Capabilities a tree navigation item must provide."""

    @property
    def display_name(self) -> str: ...

    @property
    def has_children(self) -> bool: ...

    def load_children(self) -> Sequence[Any]: ...


def display_name(item: object) -> str:
    """Return the text shown for *item*.

    Strings display as themselves; everything else must expose
    ``display_name``.
    """
    if isinstance(item, str):
        return item
    return str(getattr(item, "display_name"))


def is_selectable(item: object) -> bool:
    return bool(getattr(item, "is_selectable", True))


def metadata_of(item: object) -> TreeNodeMetadata | None:
    return getattr(item, "metadata", None)


# ---------------------------------------------------------------------------
# Generic tree node
# ---------------------------------------------------------------------------


class TreeNode(Generic[T]):
    """A tree item backed by a lazy child loader.

    The loader runs on every call to :meth:`load_children` unless
    ``cache_children`` is set, in which case the first result is kept.
    """

    def __init__(
        self,
        name: str,
        value: T,
        has_children: bool = False,
        metadata: TreeNodeMetadata | None = None,
        load_children: Callable[[], Sequence[TreeNode[T]]] | None = None,
        is_selectable: bool = True,
        cache_children: bool = False,
    ) -> None:
        self.display_name = name
        self.value = value
        self.metadata = metadata
        self.is_selectable = is_selectable
        self._has_children = has_children
        self._loader = load_children
        self._cache_children = cache_children
        self._cached: list[TreeNode[T]] | None = None

    @property
    def has_children(self) -> bool:
        if self._cached:
            return True
        return self._has_children

    def load_children(self) -> list[TreeNode[T]]:
        if self._cached is not None:
            return list(self._cached)
        if self._loader is None:
            return []
        children = list(self._loader())
        if self._cache_children:
            self._cached = children
        return children

    def __repr__(self) -> str:
        return f"TreeNode({self.display_name!r}, has_children={self._has_children})"


@dataclass
class TreeRoot(Generic[T]):
    """Names the conceptual root of a tree and holds its top-level items."""

    display_name: str
    children: list[T]


# ---------------------------------------------------------------------------
# Filesystem adapter
# ---------------------------------------------------------------------------


def _human_size(size: int) -> str:
    value = float(size)
    for unit in ("bytes", "KB", "MB", "GB", "TB"):
        if value < 1000 or unit == "TB":
            if unit == "bytes":
                return f"{int(value)} bytes"
            return f"{value:.1f} {unit}"
        value /= 1000
    return f"{size} bytes"


class FileSystemNode:
    """Tree item for a path on disk. Directories have children."""

    def __init__(self, path: str | os.PathLike[str], show_hidden: bool = False) -> None:
        self.path = Path(path)
        self.show_hidden = show_hidden
        self.is_selectable = True
        self.metadata = self._build_metadata()

    @property
    def display_name(self) -> str:
        return self.path.name or str(self.path)

    @property
    def is_directory(self) -> bool:
        return self.path.is_dir()

    @property
    def has_children(self) -> bool:
        return self.is_directory

    def load_children(self) -> list[FileSystemNode]:
        if not self.is_directory:
            return []
        try:
            entries = list(self.path.iterdir())
        except OSError as exc:
            logger.debug("Cannot list %s: %s", self.path, exc)
            return []

        if not self.show_hidden:
            entries = [p for p in entries if not p.name.startswith(".")]

        nodes = [FileSystemNode(p, show_hidden=self.show_hidden) for p in entries]
        nodes.sort(key=lambda n: n.display_name.lower())
        return nodes

    def _build_metadata(self) -> TreeNodeMetadata:
        try:
            stat = self.path.stat()
        except OSError:
            stat = None

        is_dir = self.is_directory
        subtitle = "Folder" if is_dir else _human_size(stat.st_size if stat else 0)

        detail_lines: list[str] = []
        if stat is not None:
            modified = datetime.fromtimestamp(stat.st_mtime)
            detail_lines.append(f"Updated: {modified:%Y-%m-%d %H:%M}")

        return TreeNodeMetadata(
            subtitle=subtitle,
            detail_lines=detail_lines,
            icon="📁" if is_dir else "📄",
        )

    def __repr__(self) -> str:
        return f"FileSystemNode({str(self.path)!r})"
