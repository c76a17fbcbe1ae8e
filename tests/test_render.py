"""Tests for output rendering."""

import json

import pytest
from markdown_it import MarkdownIt

from sidenav.nav import ResolvedEntry, ResolvedGroup, ResolvedLink, ResolvedTree
from sidenav.render import page_url, render_json, render_markdown

TREE = ResolvedTree(
    items=(
        ResolvedGroup(
            label="JavaScript",
            collapsed=False,
            children=(
                ResolvedEntry(label="Start Here", target="javascript/intro.md"),
                ResolvedGroup(
                    label="Notes",
                    collapsed=True,
                    children=(
                        ResolvedEntry(
                            label="[Array] methods",
                            target="javascript/notes/array.mdx",
                        ),
                    ),
                ),
                ResolvedLink(label="MDN", href="https://developer.mozilla.org/"),
            ),
        ),
        ResolvedGroup(
            label="Home",
            collapsed=False,
            children=(ResolvedEntry(label="Home", target="index.md"),),
        ),
    )
)


@pytest.mark.parametrize(
    ("site_url", "path", "expected"),
    [
        ("", "guide/setup.md", "/guide/setup/"),
        ("https://example.com", "guide/setup.md", "https://example.com/guide/setup/"),
        ("https://example.com", "guide/index.mdx", "https://example.com/guide/"),
        ("https://example.com", "index.md", "https://example.com/"),
        ("", "index.md", "/"),
    ],
)
def test_page_url(site_url: str, path: str, expected: str):
    assert page_url(site_url, path) == expected


def test_render_json_is_stable():
    output = render_json(TREE)

    assert output == render_json(TREE)
    assert output.endswith("\n")
    data = json.loads(output)
    assert data[0]["label"] == "JavaScript"
    assert data[0]["children"][1] == {
        "type": "group",
        "label": "Notes",
        "collapsed": True,
        "children": [
            {
                "type": "entry",
                "label": "[Array] methods",
                "target": "javascript/notes/array.mdx",
            }
        ],
    }
    assert data[0]["children"][2] == {
        "type": "link",
        "label": "MDN",
        "href": "https://developer.mozilla.org/",
    }


def test_render_markdown():
    md = render_markdown(
        TREE,
        site_name="Fullstack Notes",
        site_url="https://fullstacknotes.dev",
        site_description="Practical notes.",
    )

    assert md.startswith("# Fullstack Notes\n")
    assert "> Practical notes." in md
    assert "**JavaScript**" in md
    assert "[Start Here](https://fullstacknotes.dev/javascript/intro/)" in md
    assert "methods](https://fullstacknotes.dev/javascript/notes/array/)" in md
    assert "[MDN](https://developer.mozilla.org/)" in md
    assert "[Home](https://fullstacknotes.dev/)" in md
    # Display order is preserved
    assert md.index("Start Here") < md.index("**Notes**") < md.index("MDN")


def test_render_markdown_relative_links():
    md = render_markdown(TREE, site_name="Docs")

    assert "[Start Here](/javascript/intro/)" in md
    assert not any(line.startswith(">") for line in md.splitlines())


def test_render_markdown_nests_children():
    md = render_markdown(TREE, site_name="Docs")
    lines = md.splitlines()

    group_line = next(line for line in lines if "**Notes**" in line)
    child_line = next(line for line in lines if "Array" in line)
    indent = len(group_line) - len(group_line.lstrip())
    child_indent = len(child_line) - len(child_line.lstrip())
    assert child_indent > indent


def test_render_markdown_escapes_group_labels():
    tree = ResolvedTree(
        items=(
            ResolvedGroup(
                label="*C* and __init__",
                collapsed=False,
                children=(ResolvedEntry(label="Pointers", target="c/pointers.md"),),
            ),
        )
    )

    md = render_markdown(tree, site_name="Docs")
    html = MarkdownIt().render(md)

    assert "<strong>*C* and __init__</strong>" in html
