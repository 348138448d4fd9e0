from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Order",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, help_text="Timestamp when this record was created")),
                ("updated_at", models.DateTimeField(auto_now=True, help_text="Timestamp when this record was last modified")),
                ("pickup_location", models.CharField(max_length=255)),
                ("delivery_location", models.CharField(max_length=255)),
                ("pickup_date", models.CharField(max_length=32)),
                ("pickup_time", models.CharField(max_length=32)),
                ("delivery_date", models.CharField(max_length=32)),
                ("delivery_time", models.CharField(max_length=32)),
                ("receiver_name", models.CharField(max_length=150)),
                ("receiver_phone", models.CharField(max_length=32)),
                ("weight", models.CharField(blank=True, default="N/A", max_length=32)),
                ("description", models.TextField(help_text="Package description")),
                (
                    "attachment",
                    models.CharField(
                        blank=True,
                        default="",
                        help_text="Storage key (or external URL) of the package photo",
                        max_length=512,
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("Pending", "Pending"),
                            ("Accepted", "Accepted"),
                            ("Declined", "Declined"),
                            ("In Transit", "In Transit"),
                            ("Delivered", "Delivered"),
                        ],
                        db_index=True,
                        default="Pending",
                        max_length=16,
                    ),
                ),
                (
                    "customer",
                    models.ForeignKey(
                        help_text="Customer who placed this order",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="orders",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "db_table": "orders_order",
                "ordering": ["-created_at", "-id"],
                "indexes": [
                    models.Index(fields=["customer", "-created_at"], name="orders_customer_recent_idx"),
                ],
            },
        ),
    ]
