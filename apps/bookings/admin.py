"""Admin registration for reservations."""

from __future__ import annotations

from django.contrib import admin

from .models import Reservation


@admin.register(Reservation)
class ReservationAdmin(admin.ModelAdmin):
    """Browse and maintain reservations.

    New reservations are only created through ``services.book_room`` (the
    booking endpoint or ``seed_demo_data``), so the add view is disabled.
    """

    list_display = (
        "title",
        "room",
        "tenant",
        "start_time",
        "end_time",
        "created_at",
    )
    list_filter = ("tenant", "room", "start_time")
    search_fields = ("title", "room__name", "tenant__name")
    readonly_fields = ("room", "tenant", "created_at", "updated_at")

    def has_add_permission(self, request):
        return False
