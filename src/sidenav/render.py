"""Output formats for a resolved navigation tree."""

from __future__ import annotations

import mdformat

from sidenav.nav import (
    ResolvedEntry,
    ResolvedGroup,
    ResolvedNode,
    ResolvedTree,
    strip_suffix,
)

FORMATS = ("json", "markdown")


def _escape_markdown_link_text(text: str) -> str:
    """Escape characters that break markdown link syntax.

    Args:
        text: The link text to escape.

    Returns:
        Text with [ and ] escaped as \\[ and \\].
    """
    return text.replace("[", r"\[").replace("]", r"\]")


def _escape_markdown_emphasis(text: str) -> str:
    """Escape backslashes and emphasis markers so a label can sit inside **...**."""
    return text.replace("\\", "\\\\").replace("*", r"\*").replace("_", r"\_")


def page_url(site_url: str, path: str) -> str:
    """Convert a content path to the page URL on the deployed site.

    Args:
        site_url: Base URL of the site, without trailing slash. May be empty.
        path: Content path relative to the content root (e.g. "guide/setup.md").

    Returns:
        Directory-style URL; index pages map to their directory.
    """
    slug = strip_suffix(path)
    if slug == "index":
        slug = ""
    elif slug.endswith("/index"):
        slug = slug[: -len("/index")]
    url_path = f"/{slug}/" if slug else "/"
    return f"{site_url}{url_path}"


def render_json(tree: ResolvedTree) -> str:
    """Render the tree as stable JSON."""
    return tree.to_json()


def render_markdown(
    tree: ResolvedTree,
    site_name: str,
    site_url: str = "",
    site_description: str = "",
) -> str:
    """Render the tree as a markdown outline.

    Groups become bold list items, pages and links become markdown links.

    Args:
        tree: Resolved navigation tree.
        site_name: Used as the top-level heading.
        site_url: Base URL for page links; relative links when empty.
        site_description: Optional blockquote under the heading.

    Returns:
        Formatted markdown text.
    """
    lines = [f"# {site_name}", ""]
    if site_description:
        lines.append(f"> {site_description}")
        lines.append("")
    for item in tree.items:
        lines.extend(_outline(item, site_url, depth=0))
    md = "\n".join(lines) + "\n"
    return mdformat.text(md, options={"wrap": "no"})


def _outline(node: ResolvedNode, site_url: str, depth: int) -> list[str]:
    indent = "  " * depth
    if isinstance(node, ResolvedGroup):
        lines = [f"{indent}- **{_escape_markdown_emphasis(node.label)}**"]
        for child in node.children:
            lines.extend(_outline(child, site_url, depth + 1))
        return lines
    label = _escape_markdown_link_text(node.label)
    if isinstance(node, ResolvedEntry):
        return [f"{indent}- [{label}]({page_url(site_url, node.target)})"]
    return [f"{indent}- [{label}]({node.href})"]
