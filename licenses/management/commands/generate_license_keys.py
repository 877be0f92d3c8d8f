"""
Django management command to generate a batch of license keys.

Keys are generated for synthetic customers (CUSTOMER_0001 onwards) and are
not stored; they are printed for manual distribution.
"""

import json

from django.core.management.base import BaseCommand, CommandError

from core.domain.exceptions import DomainException
from licenses.application.services.license_codec import get_license_codec
from licenses.domain.license_codec import NEVER_EXPIRES, TRIAL_DAYS, LicenseType

TYPE_CHOICES = {
    "trial": LicenseType.TRIAL,
    "lifetime": LicenseType.LIFETIME,
    "demo": LicenseType.DEMO,
}


class Command(BaseCommand):
    """Command to generate license keys in bulk."""

    help = "Generate a batch of license keys signed with LICENSE_KEY_SECRET"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument(
            "--type",
            choices=sorted(TYPE_CHOICES),
            default="trial",
            help="License type (default: trial)",
        )
        parser.add_argument(
            "--days",
            type=int,
            default=TRIAL_DAYS,
            help=f"Validity in days, or recordings for demo keys (default: {TRIAL_DAYS})",
        )
        parser.add_argument(
            "--count",
            type=int,
            default=10,
            help="Number of keys to generate (default: 10)",
        )
        parser.add_argument(
            "--json",
            action="store_true",
            help="Print keys and metadata as JSON",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        if options["count"] < 1:
            raise CommandError("--count must be at least 1")

        license_type = TYPE_CHOICES[options["type"]]
        days = NEVER_EXPIRES if license_type is LicenseType.LIFETIME else options["days"]

        try:
            batch = get_license_codec().generate_batch_keys(license_type, days, options["count"])
        except DomainException as e:
            raise CommandError(e.message) from e

        if options["json"]:
            payload = [
                {
                    "customer_id": entry.customer_id,
                    "license_key": entry.license_key,
                    "metadata": json.loads(entry.metadata.to_canonical_json()),
                }
                for entry in batch
            ]
            self.stdout.write(json.dumps(payload, indent=2))
            return

        for entry in batch:
            self.stdout.write(f"{entry.customer_id}\t{entry.license_key}")
        # pylint: disable=no-member
        self.stdout.write(
            self.style.SUCCESS(f"Generated {len(batch)} {options['type']} license key(s)")
        )
