"""Errors and diagnostics raised while building the navigation tree."""

from __future__ import annotations

from dataclasses import dataclass


class ConfigError(ValueError):
    """Sidebar configuration has an invalid shape."""


class NavigationError(ValueError):
    """Sidebar configuration cannot be resolved against the content.

    Attributes:
        config_path: Location of the offending node (e.g. ``sidebar[0].items[2]``).
        section: Label of the top-level section containing the node.
    """

    def __init__(self, message: str, config_path: str, section: str | None) -> None:
        where = f"{config_path} in section {section!r}" if section else config_path
        super().__init__(f"{message} (at {where})")
        self.config_path = config_path
        self.section = section


class BrokenReferenceError(NavigationError):
    """An explicit entry points at a page that does not exist."""

    def __init__(
        self, label: str | None, target: str, config_path: str, section: str | None
    ) -> None:
        shown = label if label is not None else target
        super().__init__(
            f"Entry {shown!r} points to missing page {target!r}", config_path, section
        )
        self.label = label
        self.target = target


class DuplicateLabelError(NavigationError):
    """Two sibling groups share a label."""

    def __init__(
        self, label: str, first_path: str, second_path: str, section: str | None
    ) -> None:
        super().__init__(
            f"Duplicate group label {label!r} (first declared at {first_path})",
            second_path,
            section,
        )
        self.label = label
        self.first_path = first_path
        self.second_path = second_path


class AmbiguousClaimError(NavigationError):
    """Two autogenerate directives claim the same page."""

    def __init__(
        self,
        directory: str,
        document: str,
        first_path: str,
        second_path: str,
        section: str | None,
    ) -> None:
        super().__init__(
            f"Directory {directory!r} is autogenerated twice and both claim "
            f"{document!r} (first declared at {first_path})",
            second_path,
            section,
        )
        self.directory = directory
        self.document = document
        self.first_path = first_path
        self.second_path = second_path


@dataclass(frozen=True)
class EmptyAutogenerateWarning:
    """An autogenerate directive matched no pages."""

    directory: str
    config_path: str
    section: str | None

    def __str__(self) -> str:
        shown = self.directory or "<content root>"
        where = (
            f"{self.config_path} in section {self.section!r}"
            if self.section
            else self.config_path
        )
        return f"No pages found for autogenerate directory {shown!r} (at {where})"
