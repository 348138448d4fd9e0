from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("orders", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Message",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, help_text="Timestamp when this record was created")),
                ("updated_at", models.DateTimeField(auto_now=True, help_text="Timestamp when this record was last modified")),
                ("sender_identity", models.CharField(db_index=True, help_text="Normalized email of the sender", max_length=254)),
                ("receiver_identity", models.CharField(help_text="Normalized email of the receiver", max_length=254)),
                ("text", models.TextField(blank=True, default="")),
                (
                    "attachment",
                    models.CharField(
                        blank=True,
                        default="",
                        help_text="Storage key or external URL of an image",
                        max_length=512,
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[("sent", "Sent"), ("delivered", "Delivered"), ("read", "Read")],
                        default="sent",
                        max_length=10,
                    ),
                ),
                ("is_admin", models.BooleanField(default=False, help_text="True if sent by the dispatcher")),
                ("timestamp", models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ("read_at", models.DateTimeField(blank=True, null=True)),
                (
                    "order",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="messages",
                        to="orders.order",
                    ),
                ),
            ],
            options={
                "db_table": "chat_message",
                "ordering": ["timestamp", "id"],
                "indexes": [
                    models.Index(fields=["receiver_identity", "status"], name="chat_msg_receiver_status_idx"),
                    models.Index(fields=["sender_identity", "-timestamp"], name="chat_msg_sender_recent_idx"),
                    models.Index(fields=["receiver_identity", "-timestamp"], name="chat_msg_receiver_recent_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("sender_identity", models.F("receiver_identity")), _negated=True),
                        name="chat_msg_distinct_parties",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(
                            models.Q(("text", ""), _negated=True),
                            models.Q(("attachment", ""), _negated=True),
                            _connector="OR",
                        ),
                        name="chat_msg_has_content",
                    ),
                ],
            },
        ),
    ]
