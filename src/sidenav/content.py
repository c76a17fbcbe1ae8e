"""Content discovery: find pages and read their frontmatter."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from sidenav.nav import MARKDOWN_SUFFIXES, ContentDocument, humanize

_FRONTMATTER_RE = re.compile(
    r"\A---[ \t]*\r?\n(.*?\r?\n)?---[ \t]*(?:\r?\n|\Z)", re.DOTALL
)
_H1_RE = re.compile(r"^#[ \t]+(.+?)[ \t#]*$", re.MULTILINE)
# Fenced code runs to its closing fence, or to the end of the page
_FENCE_RE = re.compile(
    r"^[ \t]{0,3}(`{3,}|~{3,}).*?(?:^[ \t]{0,3}\1[ \t\r]*$|\Z)",
    re.MULTILINE | re.DOTALL,
)


@dataclass
class ScanResult:
    """Pages found under a content root."""

    documents: list[ContentDocument]
    skipped: list[tuple[Path, str]]


def split_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Split a page into its frontmatter mapping and body.

    Raises:
        ValueError: If the frontmatter is not valid YAML or not a mapping.
    """
    match = _FRONTMATTER_RE.match(text)
    if match is None:
        return {}, text
    try:
        data = yaml.safe_load(match.group(1) or "")
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid frontmatter: {exc}") from None
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError("Frontmatter must be a mapping")
    return data, text[match.end() :]


def parse_document(rel_path: str, text: str) -> ContentDocument:
    """Build a ContentDocument from a page's path and source text.

    Title comes from frontmatter ``title``, then the first ``#`` heading,
    then the filename. Sidebar metadata is read from the ``sidebar`` mapping
    (``order``, ``label``, ``hidden``, ``collapsed``).

    Raises:
        ValueError: If frontmatter is malformed or has wrongly-typed fields.
    """
    meta, body = split_frontmatter(text)

    title = meta.get("title")
    if title is not None and not isinstance(title, str):
        raise ValueError(f"'title' must be a string, got {type(title).__name__}")
    if not title:
        heading = _H1_RE.search(_FENCE_RE.sub("", body))
        if heading:
            title = heading.group(1).strip()
        else:
            title = humanize(rel_path.rsplit("/", 1)[-1])

    sidebar = meta.get("sidebar") or {}
    if not isinstance(sidebar, dict):
        raise ValueError(f"'sidebar' must be a mapping, got {type(sidebar).__name__}")

    order = sidebar.get("order")
    # bool is an int subclass; reject it explicitly
    if order is not None and (isinstance(order, bool) or not isinstance(order, int)):
        raise ValueError(f"'sidebar.order' must be an integer, got {order!r}")

    label = sidebar.get("label")
    if label is not None and not isinstance(label, str):
        raise ValueError(f"'sidebar.label' must be a string, got {label!r}")

    hidden = sidebar.get("hidden", False)
    if not isinstance(hidden, bool):
        raise ValueError(f"'sidebar.hidden' must be a boolean, got {hidden!r}")

    collapsed = sidebar.get("collapsed")
    if collapsed is not None and not isinstance(collapsed, bool):
        raise ValueError(f"'sidebar.collapsed' must be a boolean, got {collapsed!r}")

    return ContentDocument(
        path=rel_path,
        title=title,
        order=order,
        collapsed=collapsed,
        label=label,
        hidden=hidden,
    )


def _is_visible(rel: Path) -> bool:
    return not any(part.startswith((".", "_")) for part in rel.parts)


def scan_content(content_dir: Path) -> ScanResult:
    """Discover every markdown/MDX page under ``content_dir``.

    Args:
        content_dir: Content root directory.

    Returns:
        ScanResult with documents sorted by path and skipped files with reasons.

    Raises:
        FileNotFoundError: If the content directory doesn't exist.
    """
    if not content_dir.is_dir():
        raise FileNotFoundError(f"Content directory not found: {content_dir}")

    documents: list[ContentDocument] = []
    skipped: list[tuple[Path, str]] = []

    for path in sorted(content_dir.rglob("*")):
        if not path.is_file() or path.suffix not in MARKDOWN_SUFFIXES:
            continue
        rel = path.relative_to(content_dir)
        if not _is_visible(rel):
            continue

        try:
            text = path.read_text(encoding="utf-8")
        except UnicodeDecodeError:
            skipped.append((path, "file has encoding errors"))
            continue

        try:
            documents.append(parse_document(rel.as_posix(), text))
        except ValueError as exc:
            skipped.append((path, str(exc)))

    documents.sort(key=lambda doc: doc.path)
    return ScanResult(documents=documents, skipped=skipped)
