"""Serializers for the booking domain."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from apps.tenants.mixins import MAX_ID

from .models import Reservation


class BookRoomSerializer(serializers.Serializer):
    """Request body of the booking endpoint.

    Interval ordering is checked by the booking service so that every entry
    point reports it with the same error code.
    """

    title = serializers.CharField(max_length=255)
    start_time = serializers.DateTimeField()
    end_time = serializers.DateTimeField()


class TimeWindowQuerySerializer(serializers.Serializer):
    start_time = serializers.DateTimeField()
    end_time = serializers.DateTimeField()


class BookingQuerySerializer(serializers.Serializer):
    start_time = serializers.DateTimeField(required=False)
    end_time = serializers.DateTimeField(required=False)
    room_id = serializers.IntegerField(required=False, min_value=1, max_value=MAX_ID)


class ReservationRoomSerializer(serializers.Serializer):
    id = serializers.IntegerField(read_only=True)
    name = serializers.CharField(read_only=True)
    capacity = serializers.IntegerField(read_only=True)
    features = serializers.DictField(read_only=True)


class ReservationSerializer(serializers.ModelSerializer):
    room_id = serializers.ReadOnlyField()
    tenant_id = serializers.ReadOnlyField()
    room = ReservationRoomSerializer(read_only=True)

    class Meta:
        model = Reservation
        fields = [
            "id",
            "room_id",
            "tenant_id",
            "room",
            "title",
            "start_time",
            "end_time",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class ReservationUpdateSerializer(serializers.Serializer):
    """Fields an administrator may change; room and tenant stay fixed."""

    title = serializers.CharField(max_length=255)
    start_time = serializers.DateTimeField()
    end_time = serializers.DateTimeField()
