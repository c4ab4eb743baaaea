"""FilterSet definitions for room listing."""

from __future__ import annotations

import django_filters  # type: ignore

from .models import Room


class RoomFilterSet(django_filters.FilterSet):
    """Plain attribute filters for the tenant's rooms."""

    min_capacity = django_filters.NumberFilter(field_name="capacity", lookup_expr="gte")
    name = django_filters.CharFilter(field_name="name", lookup_expr="icontains")
    has_projector = django_filters.BooleanFilter(field_name="has_projector")
    has_video_conference = django_filters.BooleanFilter(field_name="has_video_conference")
    has_whiteboard = django_filters.BooleanFilter(field_name="has_whiteboard")

    class Meta:
        model = Room
        fields = [
            "min_capacity",
            "name",
            "has_projector",
            "has_video_conference",
            "has_whiteboard",
        ]
