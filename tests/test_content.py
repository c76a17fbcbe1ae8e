"""Tests for content discovery."""

from pathlib import Path

import pytest

from sidenav.content import parse_document, scan_content, split_frontmatter
from sidenav.nav import ContentDocument

FIXTURES = Path(__file__).parent / "fixtures"


class TestParseDocument:
    def test_reads_frontmatter(self):
        text = (
            "---\n"
            "title: Closures\n"
            "sidebar:\n"
            "  order: 2\n"
            "  label: Closures 101\n"
            "  collapsed: true\n"
            "---\n"
            "\n"
            "# Ignored heading\n"
        )

        doc = parse_document("javascript/notes/closures.md", text)

        assert doc == ContentDocument(
            path="javascript/notes/closures.md",
            title="Closures",
            order=2,
            collapsed=True,
            label="Closures 101",
            hidden=False,
        )
        assert doc.slug == "javascript/notes/closures"
        assert doc.nav_label == "Closures 101"

    def test_title_from_first_heading(self):
        doc = parse_document("guide.md", "Intro text.\n\n# User Guide ##\n\n## Sub\n")

        assert doc.title == "User Guide"
        assert doc.order is None

    def test_title_skips_headings_in_code_fences(self):
        text = (
            "Install first:\n\n"
            "```bash\n# install deps\nnpm i\n```\n\n"
            "~~~\n# also a comment\n~~~\n\n"
            "# Real Title\n"
        )

        doc = parse_document("node/setup.md", text)

        assert doc.title == "Real Title"

    def test_unclosed_fence_hides_rest_of_page(self):
        doc = parse_document("node/run.md", "```sh\n# node index.js\n")

        assert doc.title == "Run"

    def test_title_from_filename(self):
        doc = parse_document("notes/setup-guide.mdx", "No heading here.\n")

        assert doc.title == "Setup Guide"
        assert doc.slug == "notes/setup-guide"

    def test_empty_frontmatter(self):
        doc = parse_document("a.md", "---\n---\n# A\n")

        assert doc.title == "A"

    def test_hidden_flag(self):
        doc = parse_document("a.md", "---\ntitle: A\nsidebar:\n  hidden: true\n---\n")

        assert doc.hidden is True

    @pytest.mark.parametrize(
        ("frontmatter", "message"),
        [
            ("title: [a, b]", "'title' must be a string"),
            ("sidebar: 3", "'sidebar' must be a mapping"),
            ("sidebar:\n  order: first", "'sidebar.order' must be an integer"),
            ("sidebar:\n  order: true", "'sidebar.order' must be an integer"),
            ("sidebar:\n  label: 5", "'sidebar.label' must be a string"),
            ("sidebar:\n  hidden: maybe", "'sidebar.hidden' must be a boolean"),
            ("sidebar:\n  collapsed: 1", "'sidebar.collapsed' must be a boolean"),
            ("- a\n- b", "Frontmatter must be a mapping"),
            ("title: [unclosed", "Invalid frontmatter"),
        ],
    )
    def test_invalid_frontmatter(self, frontmatter: str, message: str):
        with pytest.raises(ValueError, match=message):
            parse_document("a.md", f"---\n{frontmatter}\n---\nBody\n")


def test_split_frontmatter_without_block():
    meta, body = split_frontmatter("# Title\n---\nnot frontmatter\n")

    assert meta == {}
    assert body.startswith("# Title")


def test_split_frontmatter_crlf():
    meta, body = split_frontmatter("---\r\ntitle: Win\r\n---\r\nBody\r\n")

    assert meta == {"title": "Win"}
    assert body == "Body\r\n"


class TestScanContent:
    def test_scans_fixture_tree(self):
        result = scan_content(FIXTURES / "docs")

        paths = [doc.path for doc in result.documents]
        assert paths == [
            "beyond-javascript/http-caching.md",
            "index.md",
            "javascript/gotchas/this-binding.mdx",
            "javascript/intro.md",
            "javascript/notes/closures.md",
            "javascript/notes/event-loop.md",
            "javascript/notes/hoisting.md",
            "typescript/notes/generics.md",
            "typescript/notes/secret.md",
        ]
        assert result.skipped == []

        by_path = {doc.path: doc for doc in result.documents}
        assert by_path["javascript/intro.md"].title == "Intro to JavaScript"
        assert by_path["javascript/notes/hoisting.md"].order == 1
        assert by_path["javascript/gotchas/this-binding.mdx"].label == "`this` binding"
        assert by_path["typescript/notes/secret.md"].hidden is True

    def test_skips_hidden_and_partial_paths(self, tmp_path: Path):
        (tmp_path / ".hidden.md").write_text("# Hidden\n", encoding="utf-8")
        (tmp_path / "_partial.md").write_text("# Partial\n", encoding="utf-8")
        (tmp_path / "_drafts").mkdir()
        (tmp_path / "_drafts" / "wip.md").write_text("# WIP\n", encoding="utf-8")
        (tmp_path / "visible.md").write_text("# Visible\n", encoding="utf-8")
        (tmp_path / "notes.txt").write_text("not markdown", encoding="utf-8")

        result = scan_content(tmp_path)

        assert [doc.path for doc in result.documents] == ["visible.md"]

    def test_records_unreadable_files(self, tmp_path: Path):
        (tmp_path / "bad.md").write_bytes(b"\xff\xfe\x00binary")
        (tmp_path / "broken.md").write_text(
            "---\nsidebar:\n  order: soon\n---\n", encoding="utf-8"
        )
        (tmp_path / "good.md").write_text("# Good\n", encoding="utf-8")

        result = scan_content(tmp_path)

        assert [doc.path for doc in result.documents] == ["good.md"]
        reasons = {path.name: reason for path, reason in result.skipped}
        assert reasons["bad.md"] == "file has encoding errors"
        assert "sidebar.order" in reasons["broken.md"]

    def test_missing_directory(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError, match="Content directory not found"):
            scan_content(tmp_path / "missing")
