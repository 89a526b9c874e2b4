from django.apps import AppConfig


class FastlyCdnConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "fastly_cdn"
    verbose_name = "Fastly CDN"

    def ready(self) -> None:
        from core.cache_tags import cache_tags_invalidators

        from . import services  # noqa: F401  # pragma: no cover
        from .conf import get_fastly_settings
        from .invalidator import fastly_cache_tags_invalidator

        if get_fastly_settings().enabled:
            cache_tags_invalidators.register(fastly_cache_tags_invalidator)

        return super().ready()
