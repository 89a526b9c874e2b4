"""Serializers for the purge queue endpoint."""
from __future__ import annotations

from rest_framework import serializers

from fastly_cdn.api import is_valid_purge_url

from .purger import InvalidationType


class InvalidationSerializer(serializers.Serializer):
    type = serializers.ChoiceField(choices=InvalidationType.ALL)
    expression = serializers.CharField(required=False, allow_blank=True, max_length=2048)

    def validate(self, attrs):
        invalidation_type = attrs["type"]
        expression = attrs.get("expression", "")
        if invalidation_type == InvalidationType.EVERYTHING:
            attrs["expression"] = None
            return attrs
        if not expression:
            raise serializers.ValidationError({"expression": f"An expression is required for '{invalidation_type}'."})
        if invalidation_type == InvalidationType.URL and not is_valid_purge_url(expression):
            raise serializers.ValidationError({"expression": "Provide a full http(s) URL without spaces."})
        return attrs


class PurgeQueueSerializer(serializers.Serializer):
    invalidations = InvalidationSerializer(many=True, allow_empty=False)
