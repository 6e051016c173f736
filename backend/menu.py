"""Sidebar menu tree and its flattened, JSON-ready form.

The tree is generic: every node has a key, a label, an optional link and a
typed ``MenuExtras`` record. ``flatten`` only ever reads two levels of it
(root -> section -> entry).
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, TypedDict

SEPARATOR = "separator"


class RecordSummary(TypedDict):
    id: Any
    name: str
    link: str
    editLink: str
    icon: Optional[str]


class SubmenuEntry(TypedDict):
    name: str
    icon: Optional[str]
    editLink: Optional[str]
    active: Optional[bool]
    disabled: bool


class MenuSection(TypedDict):
    name: str
    singular_name: Optional[str]
    slug: Optional[str]
    singular_slug: Optional[str]
    icon: Optional[str]
    link: Optional[str]
    link_new: Optional[str]
    contenttype: Optional[str]
    singleton: Optional[bool]
    type: Optional[str]
    active: Optional[bool]
    submenu: Optional[List[Any]]


@dataclass
class MenuExtras:
    name: Optional[str] = None
    icon: Optional[str] = None
    type: Optional[str] = None
    active: Optional[bool] = None
    singular_name: Optional[str] = None
    slug: Optional[str] = None
    singular_slug: Optional[str] = None
    link_new: Optional[str] = None
    contenttype: Optional[str] = None
    singleton: Optional[bool] = None
    submenu: Optional[List[RecordSummary]] = None


@dataclass
class MenuNode:
    key: str
    label: str = ""
    uri: Optional[str] = None
    # Entry that exists in the menu but has no target built yet
    placeholder: bool = False
    extras: MenuExtras = field(default_factory=MenuExtras)
    children: Dict[str, "MenuNode"] = field(default_factory=dict)

    def __post_init__(self):
        if not self.label:
            self.label = self.key

    def add_child(
        self,
        key: str,
        uri: Optional[str] = None,
        label: str = "",
        placeholder: bool = False,
        **extras: Any,
    ) -> "MenuNode":
        """Append a child and return it.

        A child with the same key is replaced where it stands.
        """
        child = MenuNode(key=key, label=label, uri=uri, placeholder=placeholder, extras=MenuExtras(**extras))
        self.children[key] = child
        return child

    def get_child(self, key: str) -> Optional["MenuNode"]:
        return self.children.get(key)

    def get_children(self) -> List["MenuNode"]:
        return list(self.children.values())

    def has_children(self) -> bool:
        return bool(self.children)

    @property
    def display_name(self) -> str:
        return self.extras.name or self.label


def _submenu_entry(node: MenuNode) -> SubmenuEntry:
    return {
        "name": node.display_name,
        "icon": node.extras.icon,
        "editLink": node.uri,
        "active": node.extras.active,
        "disabled": node.placeholder,
    }


def flatten(root: MenuNode) -> List[MenuSection]:
    """Turn the menu tree into a list of sections, one per child of ``root``."""
    sections: List[MenuSection] = []

    for child in root.get_children():
        if child.has_children():
            submenu: Optional[List[Any]] = [_submenu_entry(c) for c in child.get_children()]
        else:
            submenu = child.extras.submenu

        extras = child.extras
        sections.append(
            {
                "name": child.display_name,
                "singular_name": extras.singular_name,
                "slug": extras.slug,
                "singular_slug": extras.singular_slug,
                "icon": extras.icon,
                "link": child.uri,
                "link_new": extras.link_new,
                "contenttype": extras.contenttype,
                "singleton": extras.singleton,
                "type": extras.type,
                "active": extras.active,
                "submenu": submenu,
            }
        )

    return sections
