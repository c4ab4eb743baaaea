"""Integration tests for room listing and availability endpoints."""

from __future__ import annotations

from datetime import datetime, timezone as dt_timezone

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings import services
from apps.rooms.models import Room
from apps.tenants.models import Tenant

DAY = datetime(2030, 4, 2, tzinfo=dt_timezone.utc)


def at(hour: int, minute: int = 0) -> datetime:
    return DAY.replace(hour=hour, minute=minute)


class RoomListAPITests(APITestCase):
    def setUp(self) -> None:
        self.tenant = Tenant.objects.create(name="Acme")
        self.other_tenant = Tenant.objects.create(name="Globex")
        self.board = Room.objects.create(
            tenant=self.tenant,
            name="Boardroom",
            capacity=12,
            has_projector=True,
            has_video_conference=True,
            extra_features={"floor": 3},
        )
        self.huddle = Room.objects.create(tenant=self.tenant, name="Huddle", capacity=4, has_whiteboard=True)
        self.foreign = Room.objects.create(tenant=self.other_tenant, name="Globex Lab", capacity=8)
        self.headers = {"HTTP_TENANT_ID": str(self.tenant.pk)}
        self.list_url = reverse("room-list")

    def test_list_is_tenant_scoped(self) -> None:
        response = self.client.get(self.list_url, **self.headers)

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual([r["name"] for r in response.data], ["Boardroom", "Huddle"])

    def test_features_merge_flags_and_extras(self) -> None:
        response = self.client.get(reverse("room-detail", args=[self.board.pk]), **self.headers)

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(
            response.data["features"],
            {
                "floor": 3,
                "has_projector": True,
                "has_video_conference": True,
                "has_whiteboard": False,
            },
        )
        self.assertEqual(response.data["tenant_id"], self.tenant.pk)

    def test_filters(self) -> None:
        big = self.client.get(self.list_url, {"min_capacity": 10}, **self.headers)
        whiteboard = self.client.get(self.list_url, {"has_whiteboard": "true"}, **self.headers)
        named = self.client.get(self.list_url, {"name": "hud"}, **self.headers)

        self.assertEqual([r["name"] for r in big.data], ["Boardroom"])
        self.assertEqual([r["name"] for r in whiteboard.data], ["Huddle"])
        self.assertEqual([r["name"] for r in named.data], ["Huddle"])

    def test_room_of_another_tenant_is_404(self) -> None:
        response = self.client.get(reverse("room-detail", args=[self.foreign.pk]), **self.headers)

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_rooms_are_read_only(self) -> None:
        response = self.client.post(self.list_url, {"name": "New", "capacity": 3}, format="json", **self.headers)

        self.assertEqual(response.status_code, status.HTTP_405_METHOD_NOT_ALLOWED)

    def test_tenant_header_must_be_positive(self) -> None:
        response = self.client.get(self.list_url, HTTP_TENANT_ID="0")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)


class RoomAvailabilityAPITests(APITestCase):
    def setUp(self) -> None:
        self.tenant = Tenant.objects.create(name="Acme")
        self.other_tenant = Tenant.objects.create(name="Globex")
        self.alpha = Room.objects.create(tenant=self.tenant, name="Alpha", capacity=6)
        self.beta = Room.objects.create(tenant=self.tenant, name="Beta", capacity=6)
        Room.objects.create(tenant=self.other_tenant, name="Gamma", capacity=6)
        services.book_room(self.alpha.pk, self.tenant.pk, "Planning", at(10), at(11))
        self.headers = {"HTTP_TENANT_ID": str(self.tenant.pk)}
        self.url = reverse("room-available")

    def _available(self, start: datetime, end: datetime):
        return self.client.get(
            self.url,
            {"start_time": start.isoformat(), "end_time": end.isoformat()},
            **self.headers,
        )

    def test_overlapping_booking_excludes_room(self) -> None:
        response = self._available(at(10, 30), at(11, 30))

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual([r["name"] for r in response.data], ["Beta"])

    def test_adjacent_window_includes_room(self) -> None:
        before = self._available(at(9), at(10))
        after = self._available(at(11), at(12))

        self.assertEqual([r["name"] for r in before.data], ["Alpha", "Beta"])
        self.assertEqual([r["name"] for r in after.data], ["Alpha", "Beta"])

    def test_window_parameters_are_required(self) -> None:
        response = self.client.get(self.url, {"start_time": at(9).isoformat()}, **self.headers)

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertIn("end_time", response.data)

    def test_inverted_window_is_400(self) -> None:
        response = self._available(at(12), at(11))

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertEqual(response.data["code"], "invalid_interval")


class SchemaAPITests(APITestCase):
    def test_schema_is_served(self) -> None:
        response = self.client.get(reverse("schema"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
