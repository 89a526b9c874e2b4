"""Diagnostic checks for the Fastly purger."""
from __future__ import annotations

from core.diagnostics import DiagnosticCheck, Severity, diagnostics_registry
from fastly_cdn.conf import get_fastly_settings
from fastly_cdn.services import get_fastly_state

from .purger import FastlyPurger


@diagnostics_registry.register
class CredentialCheck(DiagnosticCheck):
    """Checks if valid Api credentials have been entered for Fastly."""

    check_id = "fastly_creds"
    title = "Fastly - Credentials"
    description = "Checks to see if the supplied account credentials for Fastly are valid."
    dependent_purger_plugins = (FastlyPurger.plugin_id,)

    def run(self) -> Severity:
        if not get_fastly_state().get_purge_credentials_state():
            self.recommendation = (
                "Invalid Api credentials. Make sure the token you are trying has at least "
                "global:read, purge_select, and purge_all scopes."
            )
            return Severity.ERROR

        self.recommendation = "Valid Api credentials detected."
        return Severity.OK


@diagnostics_registry.register
class ConfigurationCheck(DiagnosticCheck):
    """Checks that an API key and service id are configured."""

    check_id = "fastly_config"
    title = "Fastly - Configuration"
    description = "Checks that the Fastly API key and service id are set."
    dependent_purger_plugins = (FastlyPurger.plugin_id,)

    def run(self) -> Severity:
        config = get_fastly_settings()
        if not config.enabled:
            self.recommendation = "Fastly integration is disabled; nothing will be purged."
            return Severity.WARNING

        required = (("FASTLY_API_KEY", config.api_key), ("FASTLY_SERVICE_ID", config.service_id))
        missing = [name for name, value in required if not value]
        if missing:
            self.recommendation = f"Set {' and '.join(missing)} to enable purging."
            return Severity.ERROR

        self.recommendation = f"Purging service {config.service_id} using the {config.purge_method} method."
        return Severity.OK
