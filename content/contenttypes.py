"""Content type definitions.

A content type describes one kind of manageable record (``pages``,
``entries``, ...). Definitions come from ``contenttypes.yaml`` or from the
``BACKOFFICE_CONTENTTYPES`` setting and are normalised here into immutable
``ContentType`` objects, in configuration order.

Two input shapes are accepted::

    # mapping: the key is the default slug
    pages:
      name: Pages
      singular_name: Page

    # list: every entry names its slug
    - slug: pages
      name: Pages
      singular_name: Page
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Optional

from django.core.exceptions import ImproperlyConfigured
from django.utils.text import slugify

DEFAULT_ICON_MANY = "fa-file-alt"
DEFAULT_ICON_ONE = "fa-file"


class ContentTypeNotFound(ImproperlyConfigured):
    """Raised when a slug does not match any configured content type."""

    def __init__(self, slug: str):
        super().__init__(f"Unknown content type: {slug!r}")
        self.slug = slug


@dataclass(frozen=True)
class ContentType:
    slug: str
    name: str
    singular_name: str
    singular_slug: str
    icon_many: str = DEFAULT_ICON_MANY
    icon_one: str = DEFAULT_ICON_ONE
    singleton: bool = False
    description: str = ""

    @classmethod
    def factory(cls, slug: str, contenttypes: Iterable["ContentType"]) -> "ContentType":
        """Return the definition for ``slug`` or its singular slug."""
        for ct in contenttypes:
            if slug in (ct.slug, ct.singular_slug):
                return ct
        raise ContentTypeNotFound(slug)


def _required(definition: Mapping[str, Any], key: str, label: str) -> str:
    value = definition.get(key)
    if not value:
        raise ImproperlyConfigured(f"Content type {label!r} is missing {key!r}")
    return str(value)


def _parse_one(definition: Any, default_slug: Optional[str]) -> ContentType:
    if not isinstance(definition, Mapping):
        raise ImproperlyConfigured(
            f"Content type {default_slug or '?'!r} must be a mapping, got {type(definition).__name__}"
        )

    slug = str(definition.get("slug") or default_slug or "").strip()
    if not slug:
        raise ImproperlyConfigured("Content type definition without a slug")

    name = _required(definition, "name", slug)
    singular_name = _required(definition, "singular_name", slug)

    return ContentType(
        slug=slug,
        name=name,
        singular_name=singular_name,
        singular_slug=str(definition.get("singular_slug") or slugify(singular_name)),
        icon_many=str(definition.get("icon_many") or DEFAULT_ICON_MANY),
        icon_one=str(definition.get("icon_one") or DEFAULT_ICON_ONE),
        singleton=bool(definition.get("singleton", False)),
        description=str(definition.get("description") or ""),
    )


def parse_contenttypes(raw: Any) -> List[ContentType]:
    """Normalise raw content type configuration into ``ContentType`` objects."""
    if not raw:
        return []

    if isinstance(raw, Mapping):
        items = [_parse_one(definition, str(key)) for key, definition in raw.items()]
    elif isinstance(raw, (list, tuple)):
        items = [_parse_one(definition, None) for definition in raw]
    else:
        raise ImproperlyConfigured(
            f"Content types must be a mapping or a list, got {type(raw).__name__}"
        )

    seen = set()
    for ct in items:
        if ct.slug in seen:
            raise ImproperlyConfigured(f"Duplicate content type slug: {ct.slug!r}")
        seen.add(ct.slug)

    # slugs and singular slugs share one namespace across types
    owners = {ct.slug: ct.slug for ct in items}
    for ct in items:
        owner = owners.setdefault(ct.singular_slug, ct.slug)
        if owner != ct.slug:
            raise ImproperlyConfigured(
                f"Content type {ct.slug!r} has singular slug {ct.singular_slug!r}, already used by {owner!r}"
            )
    return items
