"""Helpers for deriving a starter sidebar from the content tree."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from sidenav.nav import humanize


def content_directories(content_dir: Path) -> list[str]:
    """List visible top-level directories under the content root, sorted."""
    if not content_dir.is_dir():
        return []
    return sorted(
        entry.name
        for entry in content_dir.iterdir()
        if entry.is_dir() and not entry.name.startswith((".", "_"))
    )


def scaffold_sidebar(directories: list[str]) -> list[dict[str, Any]]:
    """Build raw sidebar config with one autogenerated section per directory.

    The result has the same shape a user would write in sidenav.yml, so it
    can be dumped straight into the config file.
    """
    sidebar: list[dict[str, Any]] = []
    seen: set[str] = set()
    for directory in directories:
        label = humanize(directory)
        # Group labels must be unique among siblings
        if label in seen:
            label = directory
        suffix = 2
        base = label
        while label in seen:
            label = f"{base} ({suffix})"
            suffix += 1
        seen.add(label)
        sidebar.append(
            {
                "label": label,
                "collapsed": False,
                "autogenerate": {"directory": directory},
            }
        )
    return sidebar
