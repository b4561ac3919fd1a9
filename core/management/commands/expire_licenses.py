"""
Django management command to expire licenses past their expiration date.

Runs the same sweep as the daily Celery task.
"""

import logging
from datetime import date

from asgiref.sync import async_to_sync
from django.core.management.base import BaseCommand, CommandError

from licenses.application.commands.expire_licenses import ExpireLicensesCommand
from licenses.infrastructure.wiring import build_expire_handler

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    """Command to expire overdue licenses."""

    help = "Expire active licenses whose expiration date has passed"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Dry run mode - list licenses without updating them",
        )
        parser.add_argument(
            "--date",
            help="Reference date (YYYY-MM-DD) instead of today",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        today = None
        if options["date"]:
            try:
                today = date.fromisoformat(options["date"])
            except ValueError as exc:
                raise CommandError(f"Invalid date: {options['date']}") from exc

        dry_run = options["dry_run"]
        result = async_to_sync(build_expire_handler().handle)(
            ExpireLicensesCommand(dry_run=dry_run, today=today)
        )

        if dry_run:
            # pylint: disable=no-member
            self.stdout.write(self.style.WARNING("DRY RUN - No changes will be made"))
            self.stdout.write(f"Found {result.expired_count} overdue license(s)")
            for license_id in result.expired[:10]:
                self.stdout.write(f"  - License {license_id}")
            return

        for license_id in result.conflicts:
            self.stdout.write(f"  - License {license_id} changed concurrently, skipped")
        self.stdout.write(
            # pylint: disable=no-member
            self.style.SUCCESS(f"Successfully expired {result.expired_count} license(s)")
        )
