"""Navigation tree resolution.

Expands a sidebar configuration against the discovered content pages into a
fully materialized, ordered tree. Resolution is a pure function of its
inputs: no I/O and no state kept between calls.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field
from typing import cast

from sidenav.errors import (
    AmbiguousClaimError,
    BrokenReferenceError,
    DuplicateLabelError,
    EmptyAutogenerateWarning,
)
from sidenav.nav import (
    AutogenerateDirective,
    ContentDocument,
    NavEntry,
    NavGroup,
    NavLink,
    NavNode,
    ResolvedEntry,
    ResolvedGroup,
    ResolvedLink,
    ResolvedNode,
    ResolvedTree,
    normalize_ref,
)


@dataclass
class ResolveResult:
    """Resolved tree plus non-fatal diagnostics."""

    tree: ResolvedTree
    warnings: list[EmptyAutogenerateWarning] = field(default_factory=list)


@dataclass(frozen=True)
class _Located:
    """A config node with its location in the config tree."""

    node: NavNode
    config_path: str
    section: str


def resolve(
    config: Sequence[NavGroup], documents: Iterable[ContentDocument]
) -> ResolveResult:
    """Resolve sidebar sections against content pages.

    Args:
        config: Top-level sections in declaration order.
        documents: Every discovered page, in any order.

    Returns:
        ResolveResult with the expanded tree and any warnings.

    Raises:
        BrokenReferenceError: If an explicit entry targets a missing page.
        DuplicateLabelError: If sibling groups share a label.
        AmbiguousClaimError: If two directives for the same directory claim a page.
        ValueError: If ``documents`` contains the same path twice.
    """
    index = _DocumentIndex(documents)
    directives = [
        located
        for located in _iter_nodes(config)
        if isinstance(located.node, AutogenerateDirective)
    ]
    claims, matched = _assign_claims(directives, index.visible)
    builder = _TreeBuilder(index, claims, matched)
    items = builder.build(config)
    tree = ResolvedTree(items=tuple(items))
    return ResolveResult(tree=tree, warnings=builder.warnings)


class _DocumentIndex:
    """Lookup of pages by path, slug, and directory index alias."""

    def __init__(self, documents: Iterable[ContentDocument]) -> None:
        self.by_path: dict[str, ContentDocument] = {}
        for document in documents:
            if document.path in self.by_path:
                raise ValueError(f"Duplicate document path: {document.path}")
            self.by_path[document.path] = document

        self.by_slug: dict[str, ContentDocument] = {}
        # Sorted so that a.md wins over a.mdx for the shared slug "a"
        for path in sorted(self.by_path):
            document = self.by_path[path]
            self.by_slug.setdefault(document.slug, document)
            if document.slug.endswith("/index"):
                self.by_slug.setdefault(document.slug[: -len("/index")], document)

        self.visible = [
            self.by_path[path] for path in sorted(self.by_path)
            if not self.by_path[path].hidden
        ]

    def find(self, target: str) -> ContentDocument | None:
        ref = normalize_ref(target)
        return self.by_path.get(ref) or self.by_slug.get(ref)


def _iter_nodes(config: Sequence[NavGroup]) -> Iterator[_Located]:
    """Yield every config node depth-first, in declaration order."""
    for index, section in enumerate(config):
        yield from _iter_group(section, f"sidebar[{index}]", section.label)


def _iter_group(group: NavGroup, where: str, section: str) -> Iterator[_Located]:
    yield _Located(group, where, section)
    for index, child in enumerate(group.children):
        child_where = f"{where}.items[{index}]"
        if isinstance(child, NavGroup):
            yield from _iter_group(child, child_where, section)
        else:
            yield _Located(child, child_where, section)


def _assign_claims(
    directives: list[_Located], documents: list[ContentDocument]
) -> tuple[dict[str, list[ContentDocument]], set[str]]:
    """Give each page to the most specific directive containing it.

    Returns:
        Pages claimed per directory, and the set of directories that contain
        at least one page (claimed or not).
    """
    declared: dict[str, list[_Located]] = {}
    for located in directives:
        directory = normalize_ref(cast(AutogenerateDirective, located.node).directory)
        declared.setdefault(directory, []).append(located)

    claims: dict[str, list[ContentDocument]] = {directory: [] for directory in declared}
    matched: set[str] = set()

    for document in documents:
        parents = document.path.split("/")[:-1]
        owner: str | None = None
        for depth in range(len(parents), -1, -1):
            directory = "/".join(parents[:depth])
            if directory not in declared:
                continue
            matched.add(directory)
            if owner is None:
                owner = directory
        if owner is None:
            continue

        owners = declared[owner]
        if len(owners) > 1:
            first, second = owners[0], owners[1]
            raise AmbiguousClaimError(
                owner,
                document.path,
                first.config_path,
                second.config_path,
                second.section,
            )
        claims[owner].append(document)

    for claimed in claims.values():
        claimed.sort(key=_sort_key)
    return claims, matched


def _sort_key(document: ContentDocument) -> tuple[bool, int, str]:
    """Explicit order ascending, unordered pages last, then by path."""
    if document.order is None:
        return (True, 0, document.path)
    return (False, document.order, document.path)


class _TreeBuilder:
    """Second pass: build resolved nodes in declaration order."""

    def __init__(
        self,
        index: _DocumentIndex,
        claims: dict[str, list[ContentDocument]],
        matched: set[str],
    ) -> None:
        self._index = index
        self._claims = claims
        self._matched = matched
        self.warnings: list[EmptyAutogenerateWarning] = []

    def build(self, config: Sequence[NavGroup]) -> list[ResolvedNode]:
        items: list[ResolvedNode] = []
        seen: dict[str, str] = {}
        for index, section in enumerate(config):
            where = f"sidebar[{index}]"
            self._check_label(section.label, where, seen, section.label)
            items.append(self._group(section, where, section.label))
        return items

    def _group(self, group: NavGroup, where: str, section: str) -> ResolvedGroup:
        children: list[ResolvedNode] = []
        seen: dict[str, str] = {}
        for index, child in enumerate(group.children):
            child_where = f"{where}.items[{index}]"
            if isinstance(child, NavGroup):
                self._check_label(child.label, child_where, seen, section)
                children.append(self._group(child, child_where, section))
            elif isinstance(child, NavEntry):
                children.append(self._entry(child, child_where, section))
            elif isinstance(child, NavLink):
                children.append(ResolvedLink(label=child.label, href=child.href))
            else:
                children.extend(self._autogenerate(child, child_where, section))
        return ResolvedGroup(
            label=group.label,
            collapsed=bool(group.collapsed),
            children=tuple(children),
        )

    def _entry(self, entry: NavEntry, where: str, section: str) -> ResolvedEntry:
        document = self._index.find(entry.target)
        if document is None:
            raise BrokenReferenceError(entry.label, entry.target, where, section)
        label = entry.label if entry.label is not None else document.nav_label
        return ResolvedEntry(label=label, target=document.path)

    def _autogenerate(
        self, directive: AutogenerateDirective, where: str, section: str
    ) -> list[ResolvedEntry]:
        directory = normalize_ref(directive.directory)
        if directory not in self._matched:
            self.warnings.append(
                EmptyAutogenerateWarning(
                    directory=directory,
                    config_path=where,
                    section=section,
                )
            )
            return []
        return [
            ResolvedEntry(label=document.nav_label, target=document.path)
            for document in self._claims[directory]
        ]

    @staticmethod
    def _check_label(
        label: str, where: str, seen: dict[str, str], section: str
    ) -> None:
        if label in seen:
            raise DuplicateLabelError(label, seen[label], where, section)
        seen[label] = where
