"""Title, link and query helpers for content records.

Used by the sidebar to preview the latest records of each content type and
by the content API.
"""
from __future__ import annotations

import re
from typing import List, Optional

from bs4 import BeautifulSoup
from django.urls import reverse
from django.utils.text import Truncator

from .config import Config
from .contenttypes import ContentType
from .models import Content

TITLE_EXCERPT_LENGTH = 80


class ContentSummary:
    def __init__(self, config: Optional[Config] = None):
        self.config = config or Config()

    def find_latest(self, content_type: ContentType, limit: int) -> List[Content]:
        """Most recently modified records of ``content_type``, newest first."""
        qs = Content.objects.filter(content_type=content_type.slug).order_by("-modified_at", "-id")
        return list(qs[:limit])

    def get_title(self, record: Content) -> str:
        title = (record.title or "").strip()
        if title:
            return title

        excerpt = self.get_excerpt(record, TITLE_EXCERPT_LENGTH)
        if excerpt:
            return excerpt

        definition = self.config.contenttype(record.content_type)
        return f"{definition.singular_name} #{record.pk}"

    def get_excerpt(self, record: Content, length: int = 200) -> str:
        if not record.body:
            return ""
        text = BeautifulSoup(record.body, "html.parser").get_text(" ")
        text = re.sub(r"\s+", " ", text).strip()
        return Truncator(text).chars(length)

    def get_link(self, record: Content) -> str:
        definition = self.config.contenttype(record.content_type)
        return reverse(
            "content:record",
            kwargs={"singular_slug": definition.singular_slug, "slug": record.slug},
        )

    def get_edit_link(self, record: Content) -> str:
        return reverse("backend:content_edit", kwargs={"pk": record.pk})

    def get_icon(self, record: Content) -> str:
        definition = self.config.contenttype(record.content_type)
        return definition.icon_one or definition.icon_many
