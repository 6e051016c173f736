from django.core.management.base import BaseCommand
from django.utils import timezone

from content.config import Config
from content.models import Content

LOREM = [
    "<h2>Lorem ipsum</h2><p>Dolor sit amet, consectetur adipiscing elit.</p>",
    "<h2>Sed do</h2><p>Eiusmod tempor incididunt ut labore et dolore magna aliqua.</p>",
    "<h2>Ut enim</h2><p>Ad minim veniam, quis nostrud exercitation ullamco.</p><h3>Laboris</h3><p>Nisi ut aliquip.</p>",
]


class Command(BaseCommand):
    help = "Seed dummy published records for every configured content type"

    def add_arguments(self, parser):
        parser.add_argument("--count", type=int, default=3, help="Records per content type (default: 3)")

    def handle(self, *args, **options):
        count = max(options["count"], 0)
        total = 0
        for ct in Config().contenttypes():
            n = 1 if ct.singleton else count
            for i in range(1, n + 1):
                Content.objects.update_or_create(
                    content_type=ct.slug,
                    slug=f"{ct.singular_slug}-{i}",
                    defaults=dict(
                        title=f"{ct.singular_name} {i}",
                        body=LOREM[(i - 1) % len(LOREM)],
                        status=Content.Status.PUBLISHED,
                        published_at=timezone.now(),
                        version=1,
                    ),
                )
                total += 1

        self.stdout.write(self.style.SUCCESS(f"Seeded {total} records."))
