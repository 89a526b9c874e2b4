from __future__ import annotations

from django.core.management.base import BaseCommand, CommandError

from fastly_cdn.conf import get_fastly_settings
from fastly_cdn.services import get_fastly_state


class Command(BaseCommand):
    help = "Validate the Fastly API key for purge scope and record the result."

    def add_arguments(self, parser):
        parser.add_argument("--api-key", dest="api_key", help="Key to validate instead of the configured one.")
        parser.add_argument(
            "--no-store",
            action="store_true",
            help="Only report the outcome; leave the stored credentials state untouched.",
        )

    def handle(self, *args, **options):
        api_key = options.get("api_key") or get_fastly_settings().api_key
        if not api_key:
            raise CommandError("No Fastly API key configured; set FASTLY_API_KEY or pass --api-key.")

        state = get_fastly_state()
        if options["no_store"]:
            is_valid = state.validate_purge_credentials(api_key)
        else:
            is_valid = state.refresh_purge_credentials_state(api_key)

        if not is_valid:
            raise CommandError(
                "Invalid Api credentials. Make sure the token you are trying has at least "
                "global:read, purge_select, and purge_all scopes."
            )
        self.stdout.write(self.style.SUCCESS("Valid Api credentials detected."))
