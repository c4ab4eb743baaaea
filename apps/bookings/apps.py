from django.apps import AppConfig


class BookingsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.bookings"
    label = "bookings"

    def ready(self) -> None:
        from shared.application.message_bus import message_bus

        from .domain.events import ReservationBooked, ReservationCancelled
        from .handlers import audit_reservation_event

        message_bus.register_event_handler(ReservationBooked, audit_reservation_event)
        message_bus.register_event_handler(ReservationCancelled, audit_reservation_event)
