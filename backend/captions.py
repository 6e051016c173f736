"""Translatable captions used by the backend navigation.

Keys follow the ``caption.<identifier>`` pattern; the values are the English
message ids run through gettext, so ``locale/`` catalogues translate them.
"""
from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from django.utils.translation import gettext_lazy as _

CAPTIONS = {
    "caption.dashboard": _("Dashboard"),
    "caption.content": _("Content"),
    "caption.settings": _("Settings"),
    "caption.configuration": _("Configuration"),
    "caption.users_permissions": _("Users & Permissions"),
    "caption.main_configuration": _("Main configuration"),
    "caption.contenttypes": _("ContentTypes"),
    "caption.taxonomies": _("Taxonomies"),
    "caption.menu_setup": _("Menu set up"),
    "caption.routing_setup": _("Routing set up"),
    "caption.all_configuration_files": _("All configuration files"),
    "caption.maintenance": _("Maintenance"),
    "caption.api": _("Backoffice API"),
    "caption.check_database": _("Check database"),
    "caption.fixtures_dummy_content": _("Fixtures / Dummy content"),
    "caption.clear_cache": _("Clear the cache"),
    "caption.installation_checks": _("Installation checks"),
    "caption.translations": _("Translations"),
    "caption.extensions": _("Extensions"),
    "caption.kitchensink": _("The Kitchensink"),
    "caption.about": _("About"),
    "caption.file_management": _("File Management"),
    "caption.uploaded_files": _("Uploaded files"),
    "caption.view_edit_templates": _("View/edit templates"),
}


class CaptionTranslator:
    def __init__(self, captions: Optional[Dict[str, str]] = None):
        self.captions = dict(CAPTIONS if captions is None else captions)

    def trans(self, key: str) -> str:
        # KeyError on unknown captions
        return str(self.captions[key])

    def catalogue(self) -> List[Tuple[str, str]]:
        return [(key, str(value)) for key, value in self.captions.items()]
