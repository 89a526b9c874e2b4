"""Purge queue API views."""
from __future__ import annotations

import logging

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAdminUser
from rest_framework.response import Response

from .serializers import PurgeQueueSerializer
from .tasks import process_invalidations_task

logger = logging.getLogger(__name__)


@api_view(['POST'])
@permission_classes([IsAdminUser])
def queue_invalidations(request) -> Response:
    """
    Queue invalidations for the Fastly purger.

    POST data:
    - invalidations: list of ``{"type": "tag"|"url"|"everything", "expression": ...}``
    """
    serializer = PurgeQueueSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    items = [dict(item) for item in serializer.validated_data['invalidations']]
    result = process_invalidations_task.delay(items)
    logger.info("Queued %s Fastly invalidation(s) as task %s", len(items), result.id)

    return Response(
        {'task_id': result.id, 'queued': len(items)},
        status=status.HTTP_202_ACCEPTED,
    )
