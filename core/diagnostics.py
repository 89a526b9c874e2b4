"""
Diagnostic checks.

Apps register small checks here that report whether their integration is
healthy and what an administrator should do about it. Results are surfaced
through the Django system check framework (``manage.py check --deploy
--tag diagnostics``) and the diagnostics API endpoint.
"""
from __future__ import annotations

import logging
from enum import IntEnum
from typing import Any, Dict, List, Optional, Type

from django.core import checks

logger = logging.getLogger(__name__)


class Severity(IntEnum):
    INFO = -1
    OK = 0
    WARNING = 1
    ERROR = 2


class DiagnosticCheck:
    """Base class for diagnostic checks; subclasses implement `run()`."""

    check_id: str = ""
    title: str = ""
    description: str = ""
    dependent_purger_plugins: tuple = ()

    def __init__(self):
        self.recommendation: str = ""
        self.severity: Optional[Severity] = None

    def run(self) -> Severity:
        raise NotImplementedError

    def execute(self) -> Severity:
        try:
            self.severity = Severity(self.run())
        except Exception as exc:
            logger.exception("Diagnostic check %s raised an error", self.check_id)
            self.severity = Severity.ERROR
            self.recommendation = f"The check could not be completed: {exc}"
        return self.severity

    def as_dict(self) -> Dict[str, Any]:
        severity = self.severity if self.severity is not None else self.execute()
        return {
            'id': self.check_id,
            'title': self.title,
            'description': self.description,
            'severity': severity.name.lower(),
            'severity_level': int(severity),
            'recommendation': self.recommendation,
            'dependent_purger_plugins': list(self.dependent_purger_plugins),
        }


class DiagnosticsRegistry:
    """Registry of diagnostic check classes keyed by check id."""

    def __init__(self):
        self._checks: Dict[str, Type[DiagnosticCheck]] = {}

    def register(self, check_class: Type[DiagnosticCheck]) -> Type[DiagnosticCheck]:
        if not check_class.check_id:
            raise ValueError(f"{check_class.__name__} must define check_id.")
        self._checks[check_class.check_id] = check_class
        return check_class

    def unregister(self, check_id: str) -> None:
        self._checks.pop(check_id, None)

    def get_checks(self) -> List[DiagnosticCheck]:
        return [check_class() for check_class in self._checks.values()]

    def run_checks(self) -> List[Dict[str, Any]]:
        """Run every registered check, worst severity first."""
        results = []
        for check in self.get_checks():
            check.execute()
            results.append(check.as_dict())
        return sorted(results, key=lambda result: result['severity_level'], reverse=True)


diagnostics_registry = DiagnosticsRegistry()


def run_system_checks(app_configs=None, **kwargs) -> List[checks.CheckMessage]:
    messages: List[checks.CheckMessage] = []
    for result in diagnostics_registry.run_checks():
        if result['severity_level'] == Severity.ERROR:
            message_class = checks.Error
        elif result['severity_level'] == Severity.WARNING:
            message_class = checks.Warning
        else:
            continue
        messages.append(
            message_class(
                f"{result['title']}: {result['recommendation']}",
                hint=result['description'] or None,
                id=f"diagnostics.{result['id']}",
            )
        )
    return messages
