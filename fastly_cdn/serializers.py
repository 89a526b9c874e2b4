"""Serializers for the Fastly endpoints."""
from __future__ import annotations

from rest_framework import serializers

from .api import is_valid_purge_url
from .constants import MAX_KEYS_PER_PURGE


class CredentialsValidationSerializer(serializers.Serializer):
    api_key = serializers.CharField(required=False, allow_blank=False, trim_whitespace=True)
    store = serializers.BooleanField(default=True)


class PurgeUrlSerializer(serializers.Serializer):
    url = serializers.CharField(max_length=2048)

    def validate_url(self, value: str) -> str:
        if not is_valid_purge_url(value):
            raise serializers.ValidationError("Provide a full http(s) URL without spaces.")
        return value


class PurgeKeysSerializer(serializers.Serializer):
    keys = serializers.ListField(
        child=serializers.CharField(max_length=1024),
        allow_empty=False,
        max_length=MAX_KEYS_PER_PURGE * 10,
    )

    def validate_keys(self, value):
        if any(" " in key for key in value):
            raise serializers.ValidationError("Surrogate keys cannot contain spaces.")
        return value


class PurgeTagsSerializer(serializers.Serializer):
    tags = serializers.ListField(child=serializers.CharField(max_length=255), allow_empty=False)
