"""
Diagnostics API views.

Lists the result of every registered diagnostic check.
"""

import logging

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAdminUser
from rest_framework.response import Response

from core.diagnostics import Severity, diagnostics_registry

logger = logging.getLogger(__name__)


@api_view(['GET'])
@permission_classes([IsAdminUser])
def diagnostics_list(request) -> Response:
    """
    Run all diagnostic checks.

    Returns the individual results plus the overall (worst) severity.
    """
    results = diagnostics_registry.run_checks()
    worst = max((result['severity_level'] for result in results), default=int(Severity.OK))

    return Response(
        {
            'status': Severity(worst).name.lower(),
            'checks': results,
        },
        status=status.HTTP_200_OK,
    )
