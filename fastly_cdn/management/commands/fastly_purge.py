from __future__ import annotations

from django.core.management.base import BaseCommand, CommandError

from core.cache_tags import invalidate_tags
from fastly_cdn.services import get_fastly_api


class Command(BaseCommand):
    help = "Purge content from Fastly: everything, specific URLs, surrogate keys or cache tags."

    def add_arguments(self, parser):
        group = parser.add_mutually_exclusive_group(required=True)
        group.add_argument("--all", action="store_true", help="Purge the whole service.")
        group.add_argument("--url", nargs="+", dest="urls", help="Full URLs to purge.")
        group.add_argument("--key", nargs="+", dest="keys", help="Surrogate keys to purge.")
        group.add_argument("--tag", nargs="+", dest="tags", help="Cache tags to invalidate.")

    def handle(self, *args, **options):
        api = get_fastly_api()

        if options["all"]:
            self._report(api.purge_all(), "all content")
        elif options["urls"]:
            failed = [url for url in options["urls"] if not api.purge_url(url)]
            if failed:
                raise CommandError(f"Unable to purge URL(s): {', '.join(failed)}")
            self.stdout.write(self.style.SUCCESS(f"Purged {len(options['urls'])} URL(s)."))
        elif options["keys"]:
            self._report(api.purge_keys(options["keys"]), f"key(s) {' '.join(options['keys'])}")
        else:
            tags = invalidate_tags(options["tags"])
            self.stdout.write(self.style.SUCCESS(f"Invalidated cache tag(s) {' '.join(tags)}."))

    def _report(self, purged: bool, what: str) -> None:
        if not purged:
            raise CommandError(f"Unable to purge {what} from Fastly; see the logs for details.")
        self.stdout.write(self.style.SUCCESS(f"Purged {what}."))
