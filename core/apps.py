from django.apps import AppConfig
from django.core import checks
from django.db.models.signals import post_migrate


class CoreConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "core"
    verbose_name = "Core"

    def ready(self) -> None:
        from . import signals  # noqa: F401  # pragma: no cover
        from .diagnostics import run_system_checks

        post_migrate.connect(
            signals.invalidate_extension_cache_tag,
            sender=self,
            dispatch_uid="core.invalidate_extension_cache_tag",
        )
        checks.register(run_system_checks, "diagnostics", deploy=True)

        return super().ready()
