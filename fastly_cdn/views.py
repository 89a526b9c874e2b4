"""
Fastly API views.

Administrative endpoints to inspect and refresh the credential state and to
trigger purges by hand.
"""
from __future__ import annotations

import logging

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAdminUser
from rest_framework.response import Response

from core.cache_tags import EXTENSION_CACHE_TAG, invalidate_tags

from .api import FastlyApiError
from .conf import get_fastly_settings
from .serializers import (
    CredentialsValidationSerializer,
    PurgeKeysSerializer,
    PurgeTagsSerializer,
    PurgeUrlSerializer,
)
from .services import get_fastly_api, get_fastly_state
from .surrogate_keys import cache_tags_to_hashes

logger = logging.getLogger(__name__)


def _purge_response(purged: bool, **extra) -> Response:
    payload = {'purged': purged, **extra}
    if not purged:
        payload.setdefault('detail', 'Purge was not performed; check the credentials state and the logs.')
    return Response(payload, status=status.HTTP_200_OK if purged else status.HTTP_502_BAD_GATEWAY)


@api_view(['GET'])
@permission_classes([IsAdminUser])
def fastly_state(request) -> Response:
    """Report the stored credential state and non-secret configuration."""
    config = get_fastly_settings()
    return Response(
        {
            'enabled': config.enabled,
            'configured': config.is_configured,
            'service_id': config.service_id,
            'purge_method': config.purge_method,
            'valid_purge_credentials': get_fastly_state().get_purge_credentials_state(),
        }
    )


@api_view(['POST'])
@permission_classes([IsAdminUser])
def validate_credentials(request) -> Response:
    """
    Validate an API key for purge scope.

    POST data:
    - api_key: Optional key to validate; defaults to the configured key
    - store: Whether to record the outcome as the credentials state (default true)
    """
    serializer = CredentialsValidationSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    state = get_fastly_state()
    api_key = serializer.validated_data.get('api_key', get_fastly_settings().api_key)
    if serializer.validated_data['store']:
        is_valid = state.refresh_purge_credentials_state(api_key)
    else:
        is_valid = state.validate_purge_credentials(api_key)

    return Response({'valid': is_valid, 'stored': serializer.validated_data['store']})


@api_view(['GET'])
@permission_classes([IsAdminUser])
def services_list(request) -> Response:
    try:
        services = get_fastly_api().get_services()
    except FastlyApiError as e:
        logger.error("Error listing Fastly services: %s", e)
        return Response(
            {'error': 'Failed to retrieve Fastly services'},
            status=status.HTTP_502_BAD_GATEWAY
        )
    return Response({'services': services})


@api_view(['POST'])
@permission_classes([IsAdminUser])
def purge_all(request) -> Response:
    return _purge_response(get_fastly_api().purge_all())


@api_view(['POST'])
@permission_classes([IsAdminUser])
def purge_url(request) -> Response:
    serializer = PurgeUrlSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    url = serializer.validated_data['url']
    return _purge_response(get_fastly_api().purge_url(url), url=url)


@api_view(['POST'])
@permission_classes([IsAdminUser])
def purge_keys(request) -> Response:
    serializer = PurgeKeysSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    keys = serializer.validated_data['keys']
    return _purge_response(get_fastly_api().purge_keys(keys), keys=keys)


@api_view(['POST'])
@permission_classes([IsAdminUser])
def purge_tags(request) -> Response:
    """
    Invalidate cache tags through every registered invalidator.

    Unlike the other purge endpoints this always answers 202: invalidators
    report failures in the logs, not to the caller. `config:core.extension`
    purges everything, so no surrogate keys are reported for it.
    """
    serializer = PurgeTagsSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    tags = invalidate_tags(serializer.validated_data['tags'])
    purged_all = EXTENSION_CACHE_TAG in tags
    return Response(
        {
            'tags': tags,
            'purged_all': purged_all,
            'surrogate_keys': [] if purged_all else cache_tags_to_hashes(tags),
        },
        status=status.HTTP_202_ACCEPTED,
    )
