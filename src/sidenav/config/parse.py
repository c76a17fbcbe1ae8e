"""Parse raw sidebar data into navigation nodes.

Accepted item forms inside a group's ``items``:

    - javascript/intro                      # bare slug
    - label: Intro
      slug: javascript/intro                # explicit entry
    - label: MDN
      link: https://developer.mozilla.org/  # external link
    - label: Notes
      collapsed: true
      items: [...]                          # nested group
    - label: Notes
      autogenerate: {directory: javascript/notes}
    - autogenerate: {directory: javascript/notes}
    - directory: javascript/notes           # bare directive

Top-level sections must be groups.
"""

from __future__ import annotations

from typing import Any

from sidenav.errors import ConfigError
from sidenav.nav import (
    AutogenerateDirective,
    NavEntry,
    NavGroup,
    NavLink,
    NavNode,
    normalize_ref,
)

_ENTRY_KEYS = {"label", "slug"}
_LINK_KEYS = {"label", "link"}
_GROUP_KEYS = {"label", "collapsed", "items", "autogenerate"}


def parse_sidebar(raw: Any) -> tuple[NavGroup, ...]:
    """Parse the ``sidebar`` list of a config file.

    Args:
        raw: Parsed YAML value (``None`` means no sidebar).

    Returns:
        Top-level sections in declaration order.

    Raises:
        ConfigError: If any item has an invalid shape.
    """
    if raw is None:
        return ()
    if not isinstance(raw, list):
        raise ConfigError(f"'sidebar' must be a list, got {type(raw).__name__}")

    sections: list[NavGroup] = []
    for index, item in enumerate(raw):
        where = f"sidebar[{index}]"
        if not isinstance(item, dict) or not ({"items", "autogenerate"} & item.keys()):
            raise ConfigError(
                f"{where}: top-level sidebar items must be groups with 'items' "
                "or 'autogenerate'"
            )
        sections.append(_parse_group(item, where))
    return tuple(sections)


def _parse_item(item: Any, where: str) -> NavNode:
    """Parse one entry of a group's ``items`` list."""
    if isinstance(item, str):
        if not normalize_ref(item):
            raise ConfigError(f"{where}: slug must not be empty")
        return NavEntry(target=item)

    if not isinstance(item, dict):
        raise ConfigError(
            f"{where}: item must be a string or mapping, got {type(item).__name__}"
        )

    keys = set(item)
    if keys == {"directory"}:
        return AutogenerateDirective(directory=_directory(item["directory"], where))
    if keys == {"autogenerate"}:
        return _parse_autogenerate(item["autogenerate"], where)
    if "items" in keys or "autogenerate" in keys:
        return _parse_group(item, where)
    if "slug" in keys:
        _check_keys(item, _ENTRY_KEYS, where)
        target = _string(item["slug"], f"{where}.slug")
        if not normalize_ref(target):
            raise ConfigError(f"{where}.slug must not be empty")
        label = item.get("label")
        if label is not None:
            label = _string(label, f"{where}.label")
        return NavEntry(target=target, label=label)
    if "link" in keys:
        _check_keys(item, _LINK_KEYS, where)
        return NavLink(
            label=_required_label(item, where),
            href=_string(item["link"], f"{where}.link"),
        )

    raise ConfigError(
        f"{where}: cannot tell item kind from keys {sorted(map(str, keys))}; "
        "expected one of 'slug', 'link', 'items', 'autogenerate' or 'directory'"
    )


def _parse_group(item: dict[str, Any], where: str) -> NavGroup:
    _check_keys(item, _GROUP_KEYS, where)
    label = _required_label(item, where)

    collapsed = item.get("collapsed")
    if collapsed is not None and not isinstance(collapsed, bool):
        raise ConfigError(f"{where}.collapsed must be a boolean")

    if "items" in item and "autogenerate" in item:
        raise ConfigError(f"{where}: group cannot have both 'items' and 'autogenerate'")

    if "autogenerate" in item:
        children: tuple[NavNode, ...] = (
            _parse_autogenerate(item["autogenerate"], f"{where}.autogenerate"),
        )
    else:
        raw_items = item["items"]
        if raw_items is None:
            raw_items = []
        if not isinstance(raw_items, list):
            raise ConfigError(
                f"{where}.items must be a list, got {type(raw_items).__name__}"
            )
        children = tuple(
            _parse_item(child, f"{where}.items[{i}]")
            for i, child in enumerate(raw_items)
        )

    return NavGroup(label=label, children=children, collapsed=collapsed)


def _parse_autogenerate(value: Any, where: str) -> AutogenerateDirective:
    if not isinstance(value, dict) or set(value) != {"directory"}:
        raise ConfigError(f"{where}: 'autogenerate' must be a mapping with 'directory'")
    return AutogenerateDirective(directory=_directory(value["directory"], where))


def _directory(value: Any, where: str) -> str:
    directory = _string(value, f"{where}.directory")
    if ".." in directory.split("/"):
        raise ConfigError(f"{where}.directory must not contain '..'")
    return normalize_ref(directory)


def _required_label(item: dict[str, Any], where: str) -> str:
    if "label" not in item:
        raise ConfigError(f"{where}: missing 'label'")
    label = _string(item["label"], f"{where}.label")
    if not label.strip():
        raise ConfigError(f"{where}.label must not be empty")
    return label


def _string(value: Any, where: str) -> str:
    if not isinstance(value, str):
        raise ConfigError(f"{where} must be a string, got {type(value).__name__}")
    return value


def _check_keys(item: dict[str, Any], allowed: set[str], where: str) -> None:
    unknown = sorted(str(key) for key in item if key not in allowed)
    if unknown:
        raise ConfigError(f"{where}: unknown keys {unknown}")
