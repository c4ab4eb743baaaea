"""Room domain models."""

from __future__ import annotations

from typing import Any

from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

# Capability flags backed by dedicated boolean columns.
KNOWN_FEATURES = ("has_projector", "has_video_conference", "has_whiteboard")


class Room(models.Model):
    """Meeting room owned by exactly one tenant."""

    tenant = models.ForeignKey(
        "tenants.Tenant",
        on_delete=models.CASCADE,
        related_name="rooms",
    )
    name = models.CharField(max_length=255)
    capacity = models.PositiveIntegerField(help_text=_("Maximum number of attendees."))
    has_projector = models.BooleanField(default=False)
    has_video_conference = models.BooleanField(default=False)
    has_whiteboard = models.BooleanField(default=False)
    extra_features = models.JSONField(
        default=dict,
        blank=True,
        help_text=_("Additional room attributes without a dedicated column."),
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Room")
        verbose_name_plural = _("Rooms")
        ordering = ["name", "id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(capacity__gt=0),
                name="room_capacity_positive",
            ),
        ]
        indexes = [
            models.Index(fields=["tenant", "name"], name="room_tenant_name_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.name} ({self.tenant_id})"

    @property
    def features(self) -> dict[str, Any]:
        """Known capability flags merged over the open feature mapping."""
        merged = dict(self.extra_features or {})
        for flag in KNOWN_FEATURES:
            merged[flag] = getattr(self, flag)
        return merged
