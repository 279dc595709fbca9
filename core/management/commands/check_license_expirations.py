"""
Django management command to check and mark expired licenses.

This command should be run periodically (e.g., via cron or Celery beat).
"""

import logging

from asgiref.sync import async_to_sync
from django.core.management.base import BaseCommand

from licenses.application.commands.expire_licenses import ExpireLicensesCommand
from licenses.application.handlers.expire_licenses_handler import ExpireLicensesHandler
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository

logger = logging.getLogger(__name__)

PREVIEW_LIMIT = 10


class Command(BaseCommand):
    """Command to check and mark expired licenses."""

    help = "Mark active licenses past their expiry date as expired"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Dry run mode - don't actually update licenses",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        dry_run = options["dry_run"]
        handler = ExpireLicensesHandler(DjangoLicenseRepository())
        licenses = async_to_sync(handler.handle)(ExpireLicensesCommand(dry_run=dry_run))

        if dry_run:
            self.stdout.write(f"Found {len(licenses)} expired license(s)")
            # pylint: disable=no-member
            self.stdout.write(self.style.WARNING("DRY RUN - No changes will be made"))
            for license in licenses[:PREVIEW_LIMIT]:
                self.stdout.write(f"  - License {license.license_key} expired at {license.expires_at}")
            return

        if not licenses:
            # pylint: disable=no-member
            self.stdout.write(self.style.SUCCESS("No expired licenses to update"))
            return

        logger.info("Expiration sweep finished", extra={"expired": len(licenses)})
        self.stdout.write(
            # pylint: disable=no-member
            self.style.SUCCESS(f"Successfully marked {len(licenses)} license(s) as expired")
        )
