"""Create a demo tenant with rooms and meetings.

Seeding is never tied to process startup; run it explicitly:

    python manage.py seed_demo_data --reset
"""

from datetime import timedelta

from django.core.management.base import BaseCommand, CommandError
from django.db import transaction
from django.utils import timezone

from apps.bookings.exceptions import BookingError
from apps.bookings.services import book_room
from apps.rooms.models import Room
from apps.tenants.models import Tenant

DEMO_ROOMS = [
    {
        "name": "Conference Room A",
        "capacity": 10,
        "has_projector": True,
        "has_video_conference": True,
    },
    {
        "name": "Meeting Room B",
        "capacity": 6,
        "has_whiteboard": True,
    },
]


class Command(BaseCommand):
    help = "Creates a demo tenant, two rooms and a series of one-hour meetings"

    def add_arguments(self, parser):
        parser.add_argument(
            "--reset",
            action="store_true",
            help="Delete all tenants (with their rooms and reservations) first",
        )
        parser.add_argument(
            "--meetings",
            type=int,
            default=10,
            help="Number of meetings to book, one every two hours starting now",
        )

    def handle(self, *args, **options):
        meetings = options["meetings"]
        if meetings < 0:
            raise CommandError("--meetings must not be negative")

        if options["reset"]:
            deleted, _ = Tenant.objects.all().delete()
            self.stdout.write(self.style.WARNING(f"Deleted {deleted} existing records"))

        with transaction.atomic():
            tenant = Tenant.objects.create(
                name="Test Tenant",
                description="Test Tenant Description",
            )
            rooms = [Room.objects.create(tenant=tenant, **attrs) for attrs in DEMO_ROOMS]
        self.stdout.write(f"Created tenant {tenant.pk} with {len(rooms)} rooms")

        now = timezone.now().replace(microsecond=0)
        booked = 0
        for i in range(meetings):
            start = now + timedelta(hours=2 * i)
            room = rooms[i % len(rooms)]
            try:
                book_room(room.pk, tenant.pk, f"Meeting {i + 1}", start, start + timedelta(hours=1))
            except BookingError as exc:
                self.stdout.write(self.style.WARNING(f"Skipped meeting {i + 1}: {exc.message}"))
                continue
            booked += 1

        self.stdout.write(self.style.SUCCESS(f"Booked {booked} meetings for tenant {tenant.pk}"))
