import uuid

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="AuditLog",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4, editable=False, primary_key=True, serialize=False
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("principal", models.CharField(blank=True, db_index=True, max_length=255)),
                (
                    "category",
                    models.CharField(
                        choices=[("DID", "DID"), ("SYSTEM", "System")],
                        default="SYSTEM",
                        max_length=32,
                    ),
                ),
                (
                    "action",
                    models.CharField(
                        choices=[
                            ("DID_CREATED", "DID created"),
                            ("DID_READ", "DID document read"),
                            ("DID_HISTORY_READ", "DID history read"),
                            ("DID_UPDATED", "DID document updated"),
                            ("DID_DEACTIVATED", "DID deactivated"),
                        ],
                        db_index=True,
                        max_length=50,
                    ),
                ),
                (
                    "target_type",
                    models.CharField(
                        blank=True, help_text="Resource type: 'did', 'did_history'", max_length=50
                    ),
                ),
                (
                    "target_id",
                    models.CharField(
                        blank=True,
                        db_index=True,
                        help_text="Affected resource id (the DID)",
                        max_length=500,
                        null=True,
                    ),
                ),
                ("details", models.JSONField(blank=True, default=dict)),
                (
                    "severity",
                    models.CharField(
                        choices=[("INFO", "Info"), ("WARNING", "Warning"), ("ERROR", "Error")],
                        default="INFO",
                        max_length=16,
                    ),
                ),
                ("ip_address", models.GenericIPAddressField(blank=True, null=True)),
                ("user_agent", models.TextField(blank=True)),
                ("request_id", models.CharField(blank=True, max_length=64)),
            ],
            options={
                "db_table": "audit_logs",
                "ordering": ["-created_at"],
            },
        ),
    ]
