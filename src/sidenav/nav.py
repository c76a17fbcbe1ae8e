"""Navigation node model.

Configuration nodes (``NavEntry``, ``NavLink``, ``NavGroup``,
``AutogenerateDirective``) describe the sidebar as authored. Resolved nodes
(``ResolvedEntry``, ``ResolvedLink``, ``ResolvedGroup``) describe it after
autogenerate directives have been expanded against the content.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, Union

MARKDOWN_SUFFIXES = (".mdx", ".md")


def normalize_ref(ref: str) -> str:
    """Normalize a page reference or directory to a bare POSIX path.

    Strips surrounding slashes and ``.`` segments, so ``/javascript/notes/``
    and ``./javascript/notes`` both become ``javascript/notes``.
    """
    parts = [part for part in ref.strip().split("/") if part not in ("", ".")]
    return "/".join(parts)


def strip_suffix(path: str) -> str:
    """Drop a markdown suffix from a path."""
    for suffix in MARKDOWN_SUFFIXES:
        if path.endswith(suffix):
            return path[: -len(suffix)]
    return path


@dataclass(frozen=True)
class ContentDocument:
    """A content page discovered under the content root."""

    path: str
    title: str
    order: int | None = None
    collapsed: bool | None = None
    label: str | None = None
    hidden: bool = False

    @property
    def slug(self) -> str:
        """Path without its markdown suffix."""
        return strip_suffix(self.path)

    @property
    def nav_label(self) -> str:
        """Label shown in the sidebar."""
        return self.label or self.title


@dataclass(frozen=True)
class NavEntry:
    """Explicit link to a content page."""

    target: str
    label: str | None = None


@dataclass(frozen=True)
class NavLink:
    """Link to an arbitrary URL, not checked against content."""

    label: str
    href: str


@dataclass(frozen=True)
class AutogenerateDirective:
    """Placeholder expanded into every page below ``directory``."""

    directory: str


@dataclass(frozen=True)
class NavGroup:
    """Labelled group of navigation nodes."""

    label: str
    children: tuple[NavNode, ...] = ()
    collapsed: bool | None = None


NavNode = Union[NavEntry, NavLink, NavGroup, AutogenerateDirective]


@dataclass(frozen=True)
class ResolvedEntry:
    """Sidebar link to an existing content page."""

    label: str
    target: str

    def to_dict(self) -> dict[str, Any]:
        return {"type": "entry", "label": self.label, "target": self.target}


@dataclass(frozen=True)
class ResolvedLink:
    """Sidebar link to a URL."""

    label: str
    href: str

    def to_dict(self) -> dict[str, Any]:
        return {"type": "link", "label": self.label, "href": self.href}


@dataclass(frozen=True)
class ResolvedGroup:
    """Sidebar group with resolved children."""

    label: str
    collapsed: bool
    children: tuple[ResolvedNode, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "group",
            "label": self.label,
            "collapsed": self.collapsed,
            "children": [child.to_dict() for child in self.children],
        }


ResolvedNode = Union[ResolvedEntry, ResolvedLink, ResolvedGroup]


@dataclass(frozen=True)
class ResolvedTree:
    """Fully expanded sidebar, ready for rendering."""

    items: tuple[ResolvedNode, ...]

    def to_dict(self) -> list[dict[str, Any]]:
        """Convert to a list of plain dictionaries for JSON serialization."""
        return [item.to_dict() for item in self.items]

    def to_json(self) -> str:
        """Serialize deterministically."""
        data = self.to_dict()
        return json.dumps(data, indent=2, sort_keys=True, ensure_ascii=False) + "\n"

    def iter_entries(self) -> list[ResolvedEntry]:
        """Flatten the tree into its page entries, in display order."""
        return flatten_entries(self.items)


def flatten_entries(nodes: Iterable[ResolvedNode]) -> list[ResolvedEntry]:
    """Collect page entries below ``nodes`` depth-first, in display order."""
    entries: list[ResolvedEntry] = []
    stack: list[ResolvedNode] = list(reversed(list(nodes)))
    while stack:
        node = stack.pop()
        if isinstance(node, ResolvedEntry):
            entries.append(node)
        elif isinstance(node, ResolvedGroup):
            stack.extend(reversed(node.children))
    return entries


def humanize(name: str) -> str:
    """Derive a display title from a file or directory name.

    ``setup-guide.md`` becomes ``Setup Guide``.
    """
    return strip_suffix(name).replace("-", " ").replace("_", " ").strip().title()
