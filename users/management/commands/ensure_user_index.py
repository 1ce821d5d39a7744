from django.core.management.base import BaseCommand

from users import services


class Command(BaseCommand):
    help = "Create a user document collection in the search engine if it does not exist"

    def add_arguments(self, parser):
        parser.add_argument("--index", help="Collection name (defaults to the configured user collection)")

    def handle(self, *args, **opts):
        b = services.backend()
        name = opts.get("index") or b.index
        b.create_index_if_not_exists(name)

        self.stdout.write(self.style.SUCCESS(f"Index {name} created or already exists."))
