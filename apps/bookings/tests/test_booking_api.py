"""Integration tests for booking API endpoints."""

from __future__ import annotations

from datetime import datetime, timezone as dt_timezone
from unittest import mock

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings import services
from apps.bookings.exceptions import BookingBusyError, PersistenceError
from apps.bookings.models import Reservation
from apps.rooms.models import Room
from apps.tenants.models import Tenant

DAY = datetime(2030, 2, 1, tzinfo=dt_timezone.utc)


def at(hour: int, minute: int = 0) -> datetime:
    return DAY.replace(hour=hour, minute=minute)


class BookingAPITests(APITestCase):
    """Covers booking, conflicts, tenant isolation and booking queries."""

    def setUp(self) -> None:
        self.tenant = Tenant.objects.create(name="Acme")
        self.other_tenant = Tenant.objects.create(name="Globex")
        self.room = Room.objects.create(
            tenant=self.tenant,
            name="Conference Room A",
            capacity=10,
            has_projector=True,
            has_video_conference=True,
        )
        self.second_room = Room.objects.create(
            tenant=self.tenant,
            name="Meeting Room B",
            capacity=6,
            has_whiteboard=True,
        )
        self.foreign_room = Room.objects.create(tenant=self.other_tenant, name="Globex Boardroom", capacity=12)
        self.headers = {"HTTP_TENANT_ID": str(self.tenant.pk)}
        self.list_url = reverse("booking-list")

    def _book_url(self, room: Room) -> str:
        return reverse("room-book", args=[room.pk])

    def _payload(self, start: datetime, end: datetime, title: str = "Standup") -> dict[str, str]:
        return {
            "title": title,
            "start_time": start.isoformat(),
            "end_time": end.isoformat(),
        }

    def _book(self, room: Room, start: datetime, end: datetime, title: str = "Standup"):
        return self.client.post(self._book_url(room), self._payload(start, end, title), format="json", **self.headers)

    def test_book_room_returns_created_reservation(self) -> None:
        response = self._book(self.room, at(10), at(11))

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["room_id"], self.room.pk)
        self.assertEqual(response.data["tenant_id"], self.tenant.pk)
        self.assertEqual(response.data["title"], "Standup")
        self.assertEqual(response.data["room"]["name"], "Conference Room A")
        self.assertIn("id", response.data)
        self.assertIn("created_at", response.data)
        self.assertEqual(Reservation.objects.count(), 1)

    def test_back_to_back_bookings_are_allowed(self) -> None:
        first = self._book(self.room, at(10), at(11))
        second = self._book(self.room, at(11), at(12))

        self.assertEqual(first.status_code, status.HTTP_201_CREATED, first.data)
        self.assertEqual(second.status_code, status.HTTP_201_CREATED, second.data)
        self.assertEqual(Reservation.objects.count(), 2)

    def test_overlap_is_rejected_with_400(self) -> None:
        self._book(self.room, at(10), at(11))

        response = self._book(self.room, at(10, 30), at(11, 30))

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertEqual(response.data["code"], "booking_conflict")
        self.assertIn("already booked", response.data["detail"])
        self.assertEqual(Reservation.objects.count(), 1)

    def test_room_of_another_tenant_is_404(self) -> None:
        response = self._book(self.foreign_room, at(10), at(11))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND, response.data)
        self.assertEqual(response.data["code"], "room_not_found")
        self.assertFalse(Reservation.objects.exists())

    def test_invalid_interval_is_400(self) -> None:
        for start, end in [(at(10), at(10)), (at(12), at(10))]:
            with self.subTest(start=start, end=end):
                response = self._book(self.room, start, end)
                self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
                self.assertEqual(response.data["code"], "invalid_interval")

        self.assertFalse(Reservation.objects.exists())

    def test_missing_fields_are_400(self) -> None:
        response = self.client.post(
            self._book_url(self.room),
            {"start_time": at(10).isoformat()},
            format="json",
            **self.headers,
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertIn("title", response.data)
        self.assertIn("end_time", response.data)

    def test_malformed_timestamp_is_400(self) -> None:
        payload = self._payload(at(10), at(11))
        payload["start_time"] = "tomorrow morning"

        response = self.client.post(self._book_url(self.room), payload, format="json", **self.headers)

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertIn("start_time", response.data)

    def test_tenant_header_is_required(self) -> None:
        response = self.client.post(self._book_url(self.room), self._payload(at(10), at(11)), format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertIn("Tenant ID", response.data["detail"])

    def test_tenant_header_must_be_numeric(self) -> None:
        response = self.client.post(
            self._book_url(self.room),
            self._payload(at(10), at(11)),
            format="json",
            HTTP_TENANT_ID="acme",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)

    def test_tenant_in_body_is_ignored(self) -> None:
        payload = self._payload(at(10), at(11))
        payload["tenant_id"] = str(self.other_tenant.pk)

        response = self.client.post(self._book_url(self.room), payload, format="json", **self.headers)

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(Reservation.objects.get().tenant, self.tenant)

    def test_busy_and_persistence_failures_are_500(self) -> None:
        for error in (BookingBusyError(), PersistenceError()):
            with self.subTest(error=error.code):
                with mock.patch("apps.rooms.views.services.book_room", side_effect=error):
                    response = self._book(self.room, at(10), at(11))
                self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
                self.assertEqual(response.data["code"], error.code)

    def test_list_bookings_ordered_by_start(self) -> None:
        self._book(self.room, at(14), at(15), title="Review")
        self._book(self.second_room, at(9), at(10), title="Standup")
        self._book(self.room, at(11), at(12), title="Planning")
        services.book_room(self.foreign_room.pk, self.other_tenant.pk, "Globex sync", at(9), at(10))

        response = self.client.get(self.list_url, **self.headers)

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual([b["title"] for b in response.data], ["Standup", "Planning", "Review"])
        self.assertEqual(response.data[1]["room"]["features"]["has_projector"], True)

    def test_list_bookings_filters(self) -> None:
        self._book(self.room, at(9), at(10), title="Standup")
        self._book(self.second_room, at(11), at(12), title="Planning")
        self._book(self.room, at(14), at(15), title="Review")

        window = self.client.get(
            self.list_url,
            {"start_time": at(9, 30).isoformat(), "end_time": at(11, 30).isoformat()},
            **self.headers,
        )
        by_room = self.client.get(self.list_url, {"room_id": self.room.pk}, **self.headers)
        open_start = self.client.get(self.list_url, {"start_time": at(12).isoformat()}, **self.headers)
        search = self.client.get(self.list_url, {"search": "plan"}, **self.headers)

        self.assertEqual([b["title"] for b in window.data], ["Standup", "Planning"])
        self.assertEqual([b["title"] for b in by_room.data], ["Standup", "Review"])
        self.assertEqual([b["title"] for b in open_start.data], ["Review"])
        self.assertEqual([b["title"] for b in search.data], ["Planning"])

    def test_oversized_tenant_header_is_400(self) -> None:
        list_response = self.client.get(self.list_url, HTTP_TENANT_ID="99999999999999999999")
        book_response = self.client.post(
            self._book_url(self.room),
            self._payload(at(10), at(11)),
            format="json",
            HTTP_TENANT_ID="99999999999999999999",
        )

        self.assertEqual(list_response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("out of range", list_response.data["detail"])
        self.assertEqual(book_response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(Reservation.objects.exists())

    def test_oversized_room_filter_is_400(self) -> None:
        response = self.client.get(self.list_url, {"room_id": "99999999999999999999"}, **self.headers)

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertIn("room_id", response.data)

    def test_list_bookings_rejects_inverted_window(self) -> None:
        response = self.client.get(
            self.list_url,
            {"start_time": at(12).isoformat(), "end_time": at(10).isoformat()},
            **self.headers,
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertEqual(response.data["code"], "invalid_interval")

    def test_other_tenant_cannot_see_booking(self) -> None:
        booking_id = self._book(self.room, at(10), at(11)).data["id"]

        response = self.client.get(
            reverse("booking-detail", args=[booking_id]),
            HTTP_TENANT_ID=str(self.other_tenant.pk),
        )

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)


class BookingMaintenanceAPITests(APITestCase):
    """Administrative update and delete of reservations."""

    def setUp(self) -> None:
        self.tenant = Tenant.objects.create(name="Acme")
        self.room = Room.objects.create(tenant=self.tenant, name="Focus", capacity=4)
        self.headers = {"HTTP_TENANT_ID": str(self.tenant.pk)}
        self.reservation = services.book_room(self.room.pk, self.tenant.pk, "Standup", at(10), at(11))
        self.detail_url = reverse("booking-detail", args=[self.reservation.pk])

    def test_retrieve(self) -> None:
        response = self.client.get(self.detail_url, **self.headers)

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["title"], "Standup")

    def test_partial_update(self) -> None:
        response = self.client.patch(self.detail_url, {"title": "Retro"}, format="json", **self.headers)

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.reservation.refresh_from_db()
        self.assertEqual(self.reservation.title, "Retro")
        self.assertEqual(self.reservation.start_time, at(10))

    def test_full_update_requires_all_fields(self) -> None:
        response = self.client.put(self.detail_url, {"title": "Retro"}, format="json", **self.headers)

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)

    def test_full_update(self) -> None:
        payload = {"title": "Retro", "start_time": at(13).isoformat(), "end_time": at(14).isoformat()}

        response = self.client.put(self.detail_url, payload, format="json", **self.headers)

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.reservation.refresh_from_db()
        self.assertEqual(self.reservation.start_time, at(13))
        self.assertEqual(self.reservation.room, self.room)

    def test_update_rejects_inverted_interval(self) -> None:
        response = self.client.patch(
            self.detail_url,
            {"start_time": at(12).isoformat()},
            format="json",
            **self.headers,
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertEqual(response.data["code"], "invalid_interval")

    def test_delete(self) -> None:
        response = self.client.delete(self.detail_url, **self.headers)

        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Reservation.objects.exists())

    def test_bookings_cannot_be_created_directly(self) -> None:
        response = self.client.post(
            reverse("booking-list"),
            {"title": "Sneaky", "start_time": at(10).isoformat(), "end_time": at(11).isoformat()},
            format="json",
            **self.headers,
        )

        self.assertEqual(response.status_code, status.HTTP_405_METHOD_NOT_ALLOWED)
