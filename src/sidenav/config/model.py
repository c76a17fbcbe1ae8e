"""Configuration model."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from sidenav.nav import NavGroup


@dataclass(frozen=True)
class Config:
    """Resolved site configuration.

    Built once per build and passed explicitly to the steps that need it.
    """

    site_name: str
    site_description: str
    site_url: str
    content_dir: Path
    sidebar: tuple[NavGroup, ...] = ()
    config_path: Path | None = field(default=None, compare=False)
