import tempfile
from pathlib import Path
from types import SimpleNamespace

from django.test import SimpleTestCase, TestCase

from backend.menu import flatten
from backend.menu_builder import LATEST_RECORDS_LIMIT, MenuBuilder, get_menu_builder
from backend.services import NullStopwatch
from content.config import Config
from content.contenttypes import ContentTypeNotFound, parse_contenttypes
from content.models import Content

PAGES = {
    "slug": "pages",
    "name": "Pages",
    "singular_name": "Page",
    "singular_slug": "page",
    "icon_many": "fa-file",
    "singleton": False,
}


class FakeConfig:
    def __init__(self, contenttypes):
        self.contenttypes = parse_contenttypes(contenttypes)

    def get(self, name, default=None):
        if name == "contenttypes":
            return self.contenttypes
        return default


class FakeLinks:
    def generate(self, route_name, params=None, query=None):
        url = "/" + route_name.replace(":", "/") + "/"
        if params:
            url += "/".join(f"{k}={v}" for k, v in sorted(params.items())) + "/"
        if query:
            url += "?" + "&".join(f"{k}={v}" for k, v in sorted(query.items()))
        return url


class FakeTranslator:
    def trans(self, key):
        return key.upper()


class FakeSummary:
    def __init__(self, records=None):
        self.records = records or {}
        self.calls = []

    def find_latest(self, content_type, limit):
        self.calls.append((content_type.slug, limit))
        return self.records.get(content_type.slug, [])

    def get_title(self, record):
        return record.title

    def get_link(self, record):
        return f"/{record.slug}/"

    def get_edit_link(self, record):
        return f"/edit/{record.id}/"

    def get_icon(self, record):
        return record.icon


class RecordingStopwatch:
    def __init__(self):
        self.events = []

    def start(self, name):
        self.events.append(("start", name))

    def stop(self, name):
        self.events.append(("stop", name))


class BrokenStopwatch:
    def start(self, name):
        raise RuntimeError("sink down")

    def stop(self, name):
        raise RuntimeError("sink down")


def record(pk, title, icon="fa-file"):
    return SimpleNamespace(id=pk, title=title, slug=f"r{pk}", icon=icon)


def contenttype(slug, **kwargs):
    definition = {"slug": slug, "name": slug.title(), "singular_name": slug.title()[:-1]}
    definition.update(kwargs)
    return definition


class MenuBuilderTests(SimpleTestCase):
    def _builder(self, contenttypes, records=None, stopwatch=None):
        self.summary = FakeSummary(records)
        return MenuBuilder(
            config=FakeConfig(contenttypes),
            stopwatch=stopwatch or NullStopwatch(),
            link_resolver=FakeLinks(),
            translator=FakeTranslator(),
            content_summary=self.summary,
        )

    def _contenttype_sections(self, menu):
        return [s for s in menu if s["contenttype"] is not None]

    def test_section_order(self):
        menu = self._builder([PAGES]).get_menu()
        self.assertEqual(
            [s["name"] for s in menu],
            [
                "CAPTION.DASHBOARD",
                "CAPTION.CONTENT",
                "Pages",
                "CAPTION.SETTINGS",
                "CAPTION.CONFIGURATION",
                "CAPTION.MAINTENANCE",
                "CAPTION.FILE_MANAGEMENT",
            ],
        )

    def test_one_section_per_contenttype_in_config_order(self):
        cts = [contenttype("entries"), contenttype("pages"), contenttype("showcases")]
        sections = self._contenttype_sections(self._builder(cts).get_menu())
        self.assertEqual([s["slug"] for s in sections], ["entries", "pages", "showcases"])

    def test_only_pages_is_active(self):
        cts = [contenttype("entries"), contenttype("pages"), contenttype("showcases")]
        sections = self._contenttype_sections(self._builder(cts).get_menu())
        self.assertEqual({s["slug"]: s["active"] for s in sections}, {"entries": False, "pages": True, "showcases": False})

    def test_no_contenttypes(self):
        menu = self._builder([]).get_menu()
        self.assertEqual(self._contenttype_sections(menu), [])
        self.assertEqual(menu[1]["type"], "separator")
        self.assertEqual(menu[2]["name"], "CAPTION.SETTINGS")

    def test_pages_example(self):
        records = {"pages": [record(7, "Newest"), record(3, "Older")]}
        menu = self._builder([PAGES], records).get_menu()
        (pages,) = self._contenttype_sections(menu)

        self.assertEqual(pages["slug"], "pages")
        self.assertEqual(pages["name"], "Pages")
        self.assertEqual(pages["singular_name"], "Page")
        self.assertEqual(pages["singular_slug"], "page")
        self.assertEqual(pages["icon"], "fa-file")
        self.assertIs(pages["active"], True)
        self.assertIs(pages["singleton"], False)
        self.assertEqual(pages["link"], "/backend/content_overview/content_type=pages/")
        self.assertEqual(pages["link_new"], "/backend/content_new/content_type=pages/")
        self.assertEqual(
            pages["submenu"],
            [
                {"id": 7, "name": "Newest", "link": "/r7/", "editLink": "/edit/7/", "icon": "fa-file"},
                {"id": 3, "name": "Older", "link": "/r3/", "editLink": "/edit/3/", "icon": "fa-file"},
            ],
        )

    def test_latest_records_limit(self):
        builder = self._builder([PAGES], {"pages": [record(i, f"R{i}") for i in range(8, 0, -1)]})
        result = builder.get_latest_records("pages")
        self.assertEqual(self.summary.calls, [("pages", LATEST_RECORDS_LIMIT)])
        self.assertEqual(LATEST_RECORDS_LIMIT, 5)
        self.assertEqual([r["id"] for r in result], [8, 7, 6, 5, 4])

    def test_latest_records_keep_service_order(self):
        builder = self._builder([PAGES], {"pages": [record(2, "b"), record(9, "a"), record(5, "c")]})
        self.assertEqual([r["id"] for r in builder.get_latest_records("pages")], [2, 9, 5])

    def test_no_records_gives_empty_submenu(self):
        (pages,) = self._contenttype_sections(self._builder([PAGES]).get_menu())
        self.assertEqual(pages["submenu"], [])

    def test_unknown_contenttype_raises(self):
        with self.assertRaises(ContentTypeNotFound):
            self._builder([PAGES]).get_latest_records("nope")

    def test_configuration_submenu(self):
        menu = self._builder([PAGES]).get_menu()
        configuration = next(s for s in menu if s["name"] == "CAPTION.CONFIGURATION")
        self.assertIsNone(configuration["link"])
        self.assertEqual(
            [e["name"] for e in configuration["submenu"]],
            [
                "CAPTION.USERS_PERMISSIONS",
                "CAPTION.MAIN_CONFIGURATION",
                "CAPTION.CONTENTTYPES",
                "CAPTION.TAXONOMIES",
                "CAPTION.MENU_SETUP",
                "CAPTION.ROUTING_SETUP",
                "CAPTION.ALL_CONFIGURATION_FILES",
            ],
        )
        self.assertEqual(configuration["submenu"][0]["editLink"], "/backend/users/")
        self.assertEqual(
            configuration["submenu"][2]["editLink"],
            "/backend/file_edit/area=config/?file=/contenttypes.yaml",
        )
        self.assertEqual(configuration["submenu"][-1]["editLink"], "/backend/filemanager/area=config/")
        self.assertTrue(all(e["active"] is None for e in configuration["submenu"]))

    def test_submenu_edit_links_match_tree(self):
        builder = self._builder([PAGES])
        root = builder.create_sidebar_menu()
        menu = flatten(root)
        maintenance = next(s for s in menu if s["name"] == "CAPTION.MAINTENANCE")
        children = root.get_child("Maintenance").get_children()
        self.assertEqual([e["editLink"] for e in maintenance["submenu"]], [c.uri for c in children])
        self.assertEqual([e["active"] for e in maintenance["submenu"]], [c.extras.active for c in children])

    def test_maintenance_placeholders(self):
        menu = self._builder([PAGES]).get_menu()
        maintenance = next(s for s in menu if s["name"] == "CAPTION.MAINTENANCE")
        disabled = [e["name"] for e in maintenance["submenu"] if e["disabled"]]
        self.assertEqual(
            disabled,
            [
                "CAPTION.CHECK_DATABASE",
                "CAPTION.FIXTURES_DUMMY_CONTENT",
                "CAPTION.INSTALLATION_CHECKS",
                "CAPTION.EXTENSIONS",
            ],
        )
        self.assertTrue(all(e["editLink"] is None for e in maintenance["submenu"] if e["disabled"]))
        self.assertEqual(len(maintenance["submenu"]), 9)

    def test_file_management_areas(self):
        menu = self._builder([PAGES]).get_menu()
        files = menu[-1]
        self.assertEqual(
            [e["editLink"] for e in files["submenu"]],
            ["/backend/filemanager/area=files/", "/backend/filemanager/area=themes/"],
        )

    def test_stopwatch_spans(self):
        stopwatch = RecordingStopwatch()
        self._builder([PAGES], stopwatch=stopwatch).create_sidebar_menu()
        self.assertEqual(
            stopwatch.events,
            [
                ("start", "sidebar.build"),
                ("start", "sidebar.find_latest"),
                ("stop", "sidebar.find_latest"),
                ("start", "sidebar.parse_latest"),
                ("stop", "sidebar.parse_latest"),
                ("stop", "sidebar.build"),
            ],
        )

    def test_broken_stopwatch_does_not_change_output(self):
        records = {"pages": [record(1, "Only")]}
        expected = self._builder([PAGES], records).get_menu()
        with self.assertLogs("backend.services", level="WARNING"):
            actual = self._builder([PAGES], records, stopwatch=BrokenStopwatch()).get_menu()
        self.assertEqual(actual, expected)

    def test_downstream_failure_propagates(self):
        builder = self._builder([PAGES])

        def fail(contenttype, limit):
            raise RuntimeError("database unavailable")

        builder.content_summary.find_latest = fail
        with self.assertRaises(RuntimeError):
            builder.get_menu()


class MenuBuilderWithConfigDirTests(TestCase):
    def setUp(self):
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.dir = Path(tmp.name)
        (self.dir / "contenttypes.yaml").write_text(
            "news:\n  name: News\n  singular_name: News item\n  icon_many: fa-newspaper\n  icon_one: fa-bolt\n",
            encoding="utf-8",
        )

    def test_records_use_the_given_config(self):
        item = Content.objects.create(content_type="news", slug="launch", title="Launch")

        menu = get_menu_builder(Config(self.dir)).get_menu()

        news = next(s for s in menu if s["slug"] == "news")
        self.assertEqual(news["icon"], "fa-newspaper")
        self.assertEqual(
            news["submenu"],
            [
                {
                    "id": item.pk,
                    "name": "Launch",
                    "link": "/news-item/launch/",
                    "editLink": f"/backend/edit/{item.pk}/",
                    "icon": "fa-bolt",
                }
            ],
        )
