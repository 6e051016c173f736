from __future__ import annotations

import logging
from typing import List, Optional

from content.config import Config
from content.contenttypes import ContentType
from content.summary import ContentSummary

from .captions import CaptionTranslator
from .menu import SEPARATOR, MenuNode, MenuSection, RecordSummary, flatten
from .services import DjangoLinkResolver, LinkResolver, LoggingStopwatch, Stopwatch, Translator, timed

logger = logging.getLogger(__name__)

LATEST_RECORDS_LIMIT = 5

# (key, caption, icon, config file) for the file-edit entries under Configuration
CONFIG_FILE_ENTRIES = [
    ("Main configuration", "caption.main_configuration", "fa-cog", "/config.yaml"),
    ("ContentTypes", "caption.contenttypes", "fa-object-group", "/contenttypes.yaml"),
    ("Taxonomies", "caption.taxonomies", "fa-tags", "/taxonomy.yaml"),
    ("Menu set up", "caption.menu_setup", "fa-list", "/menu.yaml"),
    ("Routing set up", "caption.routing_setup", "fa-directions", "/routing.yaml"),
]


class MenuBuilder:
    """Build the backend sidebar.

    ``create_sidebar_menu`` assembles a ``MenuNode`` tree; ``get_menu``
    flattens it into the list of sections rendered by the front end.
    """

    def __init__(
        self,
        config: Config,
        stopwatch: Stopwatch,
        link_resolver: LinkResolver,
        translator: Translator,
        content_summary: ContentSummary,
    ):
        self.config = config
        self.stopwatch = stopwatch
        self.links = link_resolver
        self.translator = translator
        self.content_summary = content_summary

    def create_sidebar_menu(self) -> MenuNode:
        with timed(self.stopwatch, "sidebar.build"):
            t = self.translator.trans
            url = self.links.generate

            menu = MenuNode("root")

            menu.add_child(
                "Dashboard",
                uri=url("backend:dashboard"),
                name=t("caption.dashboard"),
                icon="fa-tachometer-alt",
            )

            menu.add_child("Content", name=t("caption.content"), type=SEPARATOR, icon="fa-file")

            for ct in self.config.get("contenttypes", []):
                params = {"content_type": ct.slug}
                menu.add_child(
                    ct.slug,
                    uri=url("backend:content_overview", params),
                    name=ct.name,
                    singular_name=ct.singular_name,
                    slug=ct.slug,
                    singular_slug=ct.singular_slug,
                    icon=ct.icon_many,
                    link_new=url("backend:content_new", params),
                    contenttype=ct.slug,
                    singleton=ct.singleton,
                    # Special case: "pages" is the one section expanded by default
                    active=ct.slug == "pages",
                    submenu=self.get_latest_records(ct.slug),
                )

            menu.add_child("Settings", name=t("caption.settings"), type=SEPARATOR, icon="fa-wrench")

            configuration = menu.add_child("Configuration", name=t("caption.configuration"), icon="fa-sliders-h")
            configuration.add_child(
                "Users & Permissions",
                uri=url("backend:users"),
                name=t("caption.users_permissions"),
                icon="fa-users",
            )
            for key, caption, icon, file in CONFIG_FILE_ENTRIES:
                configuration.add_child(
                    key,
                    uri=url("backend:file_edit", {"area": "config"}, {"file": file}),
                    name=t(caption),
                    icon=icon,
                )
            configuration.add_child(
                "All configuration files",
                uri=url("backend:filemanager", {"area": "config"}),
                name=t("caption.all_configuration_files"),
                icon="fa-cogs",
            )

            maintenance = menu.add_child("Maintenance", name=t("caption.maintenance"), icon="fa-tools")
            maintenance.add_child("API", uri=url("content:api_entrypoint"), name=t("caption.api"), icon="fa-code")
            maintenance.add_child(
                "Check database", placeholder=True, name=t("caption.check_database"), icon="fa-database"
            )
            maintenance.add_child(
                "Fixtures", placeholder=True, name=t("caption.fixtures_dummy_content"), icon="fa-hat-wizard"
            )
            maintenance.add_child(
                "Clear the cache", uri=url("backend:clear_cache"), name=t("caption.clear_cache"), icon="fa-eraser"
            )
            maintenance.add_child(
                "Installation checks",
                placeholder=True,
                name=t("caption.installation_checks"),
                icon="fa-clipboard-check",
            )
            maintenance.add_child(
                "Translations", uri=url("backend:translations"), name=t("caption.translations"), icon="fa-language"
            )
            maintenance.add_child("Extensions", placeholder=True, name=t("caption.extensions"), icon="fa-plug")
            maintenance.add_child(
                "The Kitchensink", uri=url("backend:kitchensink"), name=t("caption.kitchensink"), icon="fa-bath"
            )
            maintenance.add_child("About", uri=url("backend:about"), name=t("caption.about"), icon="fa-award")

            files = menu.add_child("File Management", name=t("caption.file_management"), icon="fa-folder-open")
            files.add_child(
                "Uploaded files",
                uri=url("backend:filemanager", {"area": "files"}),
                name=t("caption.uploaded_files"),
                icon="fa-archive",
            )
            files.add_child(
                "View/edit templates",
                uri=url("backend:filemanager", {"area": "themes"}),
                name=t("caption.view_edit_templates"),
                icon="fa-scroll",
            )

        logger.debug("Sidebar built with %d sections", len(menu.children))
        return menu

    def get_latest_records(self, slug: str) -> List[RecordSummary]:
        contenttype = ContentType.factory(slug, self.config.get("contenttypes", []))

        with timed(self.stopwatch, "sidebar.find_latest"):
            records = self.content_summary.find_latest(contenttype, LATEST_RECORDS_LIMIT)

        summary = self.content_summary
        with timed(self.stopwatch, "sidebar.parse_latest"):
            result: List[RecordSummary] = [
                {
                    "id": record.id,
                    "name": summary.get_title(record),
                    "link": summary.get_link(record),
                    "editLink": summary.get_edit_link(record),
                    "icon": summary.get_icon(record),
                }
                # capped even if the service returns more
                for record in list(records)[:LATEST_RECORDS_LIMIT]
            ]

        return result

    def get_menu(self) -> List[MenuSection]:
        return flatten(self.create_sidebar_menu())


def get_menu_builder(config: Optional[Config] = None) -> MenuBuilder:
    """Builder wired to the Django-backed services."""
    config = config or Config()
    return MenuBuilder(
        config=config,
        stopwatch=LoggingStopwatch(),
        link_resolver=DjangoLinkResolver(),
        translator=CaptionTranslator(),
        content_summary=ContentSummary(config),
    )
