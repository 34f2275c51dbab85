import threading

from django.conf import settings
from django.core.management import BaseCommand
from django.core.management.base import CommandError
from sentry_sdk import capture_exception

from elements.exceptions import StoreError
from importer.exceptions import ParserError
from importer.progress import ProgressChannel
from importer.progress import ProgressPrinter
from importer.taric import parse_taric_file


class Command(BaseCommand):
    help = "Parse an EU TARIC XML export into the element store"

    def add_arguments(self, parser):
        parser.add_argument(
            "taric_file",
            help="The TARIC XML export to be parsed.",
            type=str,
        )
        parser.add_argument(
            "--db",
            help="Path of the element store. Any elements already in it are deleted.",
            type=str,
        )
        parser.add_argument(
            "-d",
            "--target-depth",
            help="Depth below the document root of the elements to store.",
            type=int,
        )
        parser.add_argument(
            "-b",
            "--batch-size",
            help="Number of elements committed in each transaction.",
            type=int,
        )
        parser.add_argument(
            "-s",
            "--strict",
            help="Fail on a repeated hjid instead of keeping the last element.",
            action="store_true",
        )
        parser.add_argument(
            "--no-progress",
            help="Do not report progress on stderr.",
            action="store_true",
        )

    def write_progress(self, text: str):
        self.stderr.write(text, style_func=lambda msg: msg, ending="")
        self.stderr.flush()

    def option_or_setting(self, options, name: str, setting: str) -> int:
        value = options[name]
        if value is None:
            value = getattr(settings, setting)
        if value < 1:
            flag = name.replace("_", "-")
            raise CommandError(f"--{flag} must be at least 1, got {value}")
        return value

    def handle(self, *args, **options):
        db_path = options["db"] or settings.TE_DATABASE_PATH
        parse_options = dict(
            target_depth=self.option_or_setting(
                options,
                "target_depth",
                "TARGET_DEPTH",
            ),
            batch_size=self.option_or_setting(options, "batch_size", "BATCH_SIZE"),
            strict=options["strict"] or settings.STRICT_IDENTIFIERS,
            chunk_size=settings.READ_CHUNK_SIZE,
        )

        try:
            if options["no_progress"]:
                count = parse_taric_file(
                    options["taric_file"],
                    db_path,
                    **parse_options,
                )
            elif self.stderr.isatty():
                count = self.parse_with_progress_thread(
                    options["taric_file"],
                    db_path,
                    parse_options,
                )
            else:
                printer = ProgressPrinter(self.write_progress)
                count = parse_taric_file(
                    options["taric_file"],
                    db_path,
                    on_progress=printer.update,
                    **parse_options,
                )
                printer.done()
        except (OSError, ParserError, StoreError) as e:
            if settings.SENTRY_ENABLED:
                capture_exception(e)
            raise CommandError(f"parsing {options['taric_file']}: {e}") from e

        self.stdout.write(
            self.style.SUCCESS(f"Parsed {count} elements into {db_path}"),
        )

    def parse_with_progress_thread(self, taric_file, db_path, parse_options) -> int:
        """Parse on this thread while another keeps the terminal up to date,
        so a slow terminal never holds up the parse."""
        channel = ProgressChannel()
        printer = ProgressPrinter(self.write_progress)
        reporter = threading.Thread(
            target=printer.consume,
            args=(channel,),
            daemon=True,
        )
        reporter.start()

        try:
            count = parse_taric_file(
                taric_file,
                db_path,
                on_progress=channel.publish,
                **parse_options,
            )
        finally:
            channel.close()
            reporter.join()

        printer.done()
        return count
