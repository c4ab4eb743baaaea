"""Reservation domain models."""

from __future__ import annotations

from django.core.exceptions import ValidationError  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from shared.domain.value_objects import TimeRange


class Reservation(models.Model):
    """A room booked for the half-open interval [start_time, end_time)."""

    room = models.ForeignKey(
        "rooms.Room",
        on_delete=models.CASCADE,
        related_name="reservations",
    )
    # Denormalized from room.tenant for tenant-scoped queries.
    tenant = models.ForeignKey(
        "tenants.Tenant",
        on_delete=models.CASCADE,
        related_name="reservations",
    )
    title = models.CharField(max_length=255)
    start_time = models.DateTimeField()
    end_time = models.DateTimeField()
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Reservation")
        verbose_name_plural = _("Reservations")
        ordering = ["start_time", "id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(end_time__gt=models.F("start_time")),
                name="reservation_valid_interval",
            ),
        ]
        indexes = [
            models.Index(fields=["room", "start_time", "end_time"], name="reservation_room_time_idx"),
            models.Index(fields=["tenant", "start_time"], name="reservation_tenant_time_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.title} in room {self.room_id} {self.time_range}"

    @property
    def time_range(self) -> TimeRange:
        return TimeRange(self.start_time, self.end_time)

    def clean(self) -> None:
        if self.start_time and self.end_time and self.start_time >= self.end_time:
            raise ValidationError(_("Start time must be before end time."))
        if self.room_id and self.tenant_id and self.room.tenant_id != self.tenant_id:
            raise ValidationError(_("Reservation tenant must match the room tenant."))
