import json

from django.core.management.base import BaseCommand
from django.core.serializers.json import DjangoJSONEncoder

from backend.menu_builder import get_menu_builder


class Command(BaseCommand):
    help = "Print the backend sidebar menu as JSON"

    def add_arguments(self, parser):
        parser.add_argument("--indent", type=int, default=2)

    def handle(self, *args, **options):
        menu = get_menu_builder().get_menu()
        self.stdout.write(json.dumps(menu, indent=options["indent"], cls=DjangoJSONEncoder))
