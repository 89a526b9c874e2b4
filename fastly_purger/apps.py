from django.apps import AppConfig


class FastlyPurgerConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "fastly_purger"
    verbose_name = "Fastly Purger"

    def ready(self) -> None:
        # Importing the checks registers them with the diagnostics registry.
        from . import checks  # noqa: F401  # pragma: no cover

        return super().ready()
