"""Room API views: listing, availability and booking."""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from drf_spectacular.utils import extend_schema, extend_schema_view  # type: ignore
from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.bookings import services
from apps.bookings.serializers import BookRoomSerializer, ReservationSerializer, TimeWindowQuerySerializer
from apps.tenants.mixins import TENANT_HEADER_PARAMETER, TenantScopedMixin

from .filters import RoomFilterSet
from .models import Room
from .serializers import RoomSerializer


@extend_schema_view(
    list=extend_schema(summary="List the tenant's rooms", parameters=[TENANT_HEADER_PARAMETER]),
    retrieve=extend_schema(summary="Get a room", parameters=[TENANT_HEADER_PARAMETER]),
)
class RoomViewSet(TenantScopedMixin, viewsets.ReadOnlyModelViewSet):
    """Rooms are provisioned administratively; the API only reads and books them."""

    serializer_class = RoomSerializer
    permission_classes = [permissions.AllowAny]
    filter_backends = [DjangoFilterBackend]
    filterset_class = RoomFilterSet

    def get_queryset(self):  # type: ignore
        return Room.objects.filter(tenant_id=self.get_tenant_id()).order_by("name", "id")

    @extend_schema(
        summary="Get available rooms for a time period",
        parameters=[TENANT_HEADER_PARAMETER, TimeWindowQuerySerializer],
        responses=RoomSerializer(many=True),
    )
    @action(detail=False, methods=["get"])
    def available(self, request):  # type: ignore
        tenant_id = self.get_tenant_id()
        query = TimeWindowQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        rooms = services.available_rooms(
            tenant_id,
            query.validated_data["start_time"],
            query.validated_data["end_time"],
        )
        return Response(RoomSerializer(rooms, many=True).data)

    @extend_schema(
        summary="Book a room for a specific time period",
        parameters=[TENANT_HEADER_PARAMETER],
        request=BookRoomSerializer,
        responses={201: ReservationSerializer},
    )
    @action(detail=True, methods=["post"])
    def book(self, request, pk=None):  # type: ignore
        tenant_id = self.get_tenant_id()
        serializer = BookRoomSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        reservation = services.book_room(
            pk,
            tenant_id,
            serializer.validated_data["title"],
            serializer.validated_data["start_time"],
            serializer.validated_data["end_time"],
        )
        return Response(ReservationSerializer(reservation).data, status=status.HTTP_201_CREATED)
