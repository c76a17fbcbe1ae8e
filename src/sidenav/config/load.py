"""Configuration loading from sidenav.yml."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from sidenav.config.model import Config
from sidenav.config.parse import parse_sidebar

DEFAULT_SITE_NAME = "Documentation"
DEFAULT_CONTENT_DIR = "docs"


class _PermissiveLoader(yaml.SafeLoader):
    """SafeLoader that ignores unknown Python tags.

    Site configs shared with other tools may carry Python-specific YAML tags
    like !python/object/apply which SafeLoader rejects. This loader treats
    them as raw strings to allow parsing the rest of the config.
    """


def _ignore_unknown(loader: yaml.Loader, tag_suffix: str, node: yaml.Node) -> str:
    """Return the raw tag as a placeholder string."""
    return f"<{node.tag}>"


# Register handler for all Python tags (both full and shorthand forms)
_PermissiveLoader.add_multi_constructor("tag:yaml.org,2002:python/", _ignore_unknown)
_PermissiveLoader.add_multi_constructor("!python/", _ignore_unknown)


def load_config(config_path: Path) -> Config:
    """Load and resolve configuration from a YAML file.

    Args:
        config_path: Path to sidenav.yml file.

    Returns:
        Resolved Config object. Relative ``content_dir`` values are
        resolved against the config file's directory.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If the config is not a mapping or has invalid fields.
    """
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, encoding="utf-8") as f:
        raw = yaml.load(f, Loader=_PermissiveLoader)

    if not isinstance(raw, dict):
        raise ValueError(f"Config file must be a mapping: {config_path}")

    return _config_from_mapping(raw, config_path)


def _config_from_mapping(raw: dict[str, Any], config_path: Path) -> Config:
    """Build a Config from a parsed YAML mapping."""
    site_name = _optional_string(raw, "site_name", DEFAULT_SITE_NAME)
    site_description = _optional_string(raw, "site_description", "")
    site_url = _optional_string(raw, "site_url", "").rstrip("/")

    content_dir = Path(_optional_string(raw, "content_dir", DEFAULT_CONTENT_DIR))
    if not content_dir.is_absolute():
        content_dir = config_path.parent / content_dir

    return Config(
        site_name=site_name,
        site_description=site_description,
        site_url=site_url,
        content_dir=content_dir,
        sidebar=parse_sidebar(raw.get("sidebar")),
        config_path=config_path,
    )


def _optional_string(raw: dict[str, Any], key: str, default: str) -> str:
    value = raw.get(key)
    if value is None:
        return default
    if not isinstance(value, str):
        raise ValueError(f"'{key}' must be a string, got {type(value).__name__}")
    return value
