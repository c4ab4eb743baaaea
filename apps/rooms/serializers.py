"""Serializers for the rooms domain."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import Room


class RoomSerializer(serializers.ModelSerializer):
    tenant_id = serializers.ReadOnlyField()
    features = serializers.DictField(read_only=True)

    class Meta:
        model = Room
        fields = [
            "id",
            "tenant_id",
            "name",
            "capacity",
            "has_projector",
            "has_video_conference",
            "has_whiteboard",
            "extra_features",
            "features",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
