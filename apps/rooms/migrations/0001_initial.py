import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("tenants", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Room",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=255)),
                ("capacity", models.PositiveIntegerField(help_text="Maximum number of attendees.")),
                ("has_projector", models.BooleanField(default=False)),
                ("has_video_conference", models.BooleanField(default=False)),
                ("has_whiteboard", models.BooleanField(default=False)),
                (
                    "extra_features",
                    models.JSONField(
                        blank=True,
                        default=dict,
                        help_text="Additional room attributes without a dedicated column.",
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "tenant",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="rooms",
                        to="tenants.tenant",
                    ),
                ),
            ],
            options={
                "verbose_name": "Room",
                "verbose_name_plural": "Rooms",
                "ordering": ["name", "id"],
                "indexes": [models.Index(fields=["tenant", "name"], name="room_tenant_name_idx")],
                "constraints": [
                    models.CheckConstraint(condition=models.Q(("capacity__gt", 0)), name="room_capacity_positive"),
                ],
            },
        ),
    ]
