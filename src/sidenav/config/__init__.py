"""Configuration loading and resolution."""

from sidenav.config.derive import content_directories, scaffold_sidebar
from sidenav.config.load import load_config
from sidenav.config.model import Config
from sidenav.config.parse import parse_sidebar

__all__ = [
    "Config",
    "content_directories",
    "load_config",
    "parse_sidebar",
    "scaffold_sidebar",
]
