import sys

from django.conf import settings
from django.core.management import BaseCommand
from django.core.management.base import CommandError

from elements.browser import Browser
from elements.exceptions import StoreError
from elements.store import ElementStore


class Command(BaseCommand):
    help = "Browse the elements of an ingested TARIC export"

    stealth_options = ("stdin",)

    def add_arguments(self, parser):
        parser.add_argument(
            "--db",
            help="Path of the element store to browse.",
            type=str,
        )
        parser.add_argument(
            "-n",
            "--page-size",
            help="Number of elements listed per page.",
            type=int,
        )

    def handle(self, *args, **options):
        db_path = options["db"] or settings.TE_DATABASE_PATH
        page_size = options["page_size"]
        if page_size is None:
            page_size = settings.BROWSER_PAGE_SIZE
        if page_size < 1:
            raise CommandError(f"--page-size must be at least 1, got {page_size}")

        try:
            with ElementStore.open_read_only(db_path) as store:
                browser = Browser(
                    store,
                    options.get("stdin", sys.stdin),
                    self.stdout,
                    page_size=page_size,
                )
                browser.run()
        except StoreError as e:
            raise CommandError(f"browsing {db_path}: {e}") from e
