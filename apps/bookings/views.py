"""API views for the booking domain."""

from __future__ import annotations

from drf_spectacular.utils import extend_schema, extend_schema_view  # type: ignore
from rest_framework import mixins, permissions, viewsets  # type: ignore
from rest_framework.filters import SearchFilter  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.tenants.mixins import TENANT_HEADER_PARAMETER, TenantScopedMixin

from . import services
from .models import Reservation
from .serializers import BookingQuerySerializer, ReservationSerializer, ReservationUpdateSerializer


@extend_schema_view(
    list=extend_schema(
        summary="Get all bookings with optional time period filter",
        parameters=[TENANT_HEADER_PARAMETER, BookingQuerySerializer],
    ),
    retrieve=extend_schema(summary="Get a booking", parameters=[TENANT_HEADER_PARAMETER]),
    update=extend_schema(
        summary="Update a booking (administrative, not conflict-checked)",
        parameters=[TENANT_HEADER_PARAMETER],
        request=ReservationUpdateSerializer,
        responses=ReservationSerializer,
    ),
    partial_update=extend_schema(
        summary="Partially update a booking (administrative, not conflict-checked)",
        parameters=[TENANT_HEADER_PARAMETER],
        request=ReservationUpdateSerializer,
        responses=ReservationSerializer,
    ),
    destroy=extend_schema(summary="Delete a booking", parameters=[TENANT_HEADER_PARAMETER]),
)
class ReservationViewSet(
    TenantScopedMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.UpdateModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    """Tenant-scoped read path plus administrative maintenance of reservations.

    Reservations are created only through ``POST rooms/{id}/book/``.
    """

    serializer_class = ReservationSerializer
    permission_classes = [permissions.AllowAny]
    filter_backends = [SearchFilter]
    search_fields = ["title"]

    def get_queryset(self):  # type: ignore
        return services.list_bookings(self.get_tenant_id())

    def list(self, request, *args, **kwargs):  # type: ignore
        query = BookingQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        bookings = services.list_bookings(
            self.get_tenant_id(),
            start=query.validated_data.get("start_time"),
            end=query.validated_data.get("end_time"),
            room_id=query.validated_data.get("room_id"),
        )
        bookings = self.filter_queryset(bookings)
        return Response(self.get_serializer(bookings, many=True).data)

    def update(self, request, *args, **kwargs):  # type: ignore
        partial = kwargs.pop("partial", False)
        reservation: Reservation = self.get_object()  # type: ignore
        serializer = ReservationUpdateSerializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        reservation = services.update_reservation(
            reservation,
            title=serializer.validated_data.get("title"),
            start=serializer.validated_data.get("start_time"),
            end=serializer.validated_data.get("end_time"),
        )
        return Response(self.get_serializer(reservation).data)

    def perform_destroy(self, instance):  # type: ignore
        services.cancel_reservation(instance)
