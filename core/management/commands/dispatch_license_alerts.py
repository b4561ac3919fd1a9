"""
Django management command to send license expiration alerts.
"""

from asgiref.sync import async_to_sync
from django.core.management.base import BaseCommand

from licenses.application.commands.dispatch_expiration_alerts import (
    DispatchExpirationAlertsCommand,
)
from licenses.infrastructure.wiring import alert_threshold_days, build_dispatch_handler


class Command(BaseCommand):
    """Command to dispatch expiration alerts."""

    help = "Send expiration alerts for active licenses expiring soon"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument(
            "--days",
            type=int,
            default=None,
            help="Alert window in days (defaults to LICENSE_ALERT_THRESHOLD_DAYS)",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        days = options["days"] if options["days"] is not None else alert_threshold_days()
        result = async_to_sync(build_dispatch_handler().handle)(
            DispatchExpirationAlertsCommand(threshold_days=days)
        )
        self.stdout.write(f"Skipped {len(result.skipped)} license(s) already alerted")
        if result.failed:
            # pylint: disable=no-member
            self.stdout.write(self.style.ERROR(f"Failed to alert {len(result.failed)} license(s)"))
        self.stdout.write(
            # pylint: disable=no-member
            self.style.SUCCESS(f"Dispatched {len(result.dispatched)} alert(s)")
        )
