"""Admin registrations for rooms."""

from __future__ import annotations

from django.contrib import admin

from .models import Room


@admin.register(Room)
class RoomAdmin(admin.ModelAdmin):
    list_display = (
        "name",
        "tenant",
        "capacity",
        "has_projector",
        "has_video_conference",
        "has_whiteboard",
        "created_at",
    )
    list_filter = ("tenant", "has_projector", "has_video_conference", "has_whiteboard")
    search_fields = ("name", "tenant__name")
    readonly_fields = ("created_at", "updated_at")
