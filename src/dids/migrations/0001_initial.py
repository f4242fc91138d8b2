import uuid

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="DIDDocumentVersion",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4, editable=False, primary_key=True, serialize=False
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "identity",
                    models.CharField(
                        db_index=True, help_text="The DID this version belongs to", max_length=500
                    ),
                ),
                (
                    "sequence",
                    models.PositiveIntegerField(
                        help_text="Strictly increasing per identity, starting at 1"
                    ),
                ),
                ("payload", models.JSONField(help_text="W3C DID Document JSON")),
                (
                    "is_active",
                    models.BooleanField(
                        default=True, help_text="At most one active version per identity"
                    ),
                ),
                (
                    "owner",
                    models.CharField(
                        db_index=True, help_text="Principal holding mutation rights", max_length=255
                    ),
                ),
            ],
            options={
                "ordering": ["identity", "sequence"],
            },
        ),
        migrations.AddConstraint(
            model_name="diddocumentversion",
            constraint=models.UniqueConstraint(
                fields=("identity", "sequence"), name="did_version_sequence_unique"
            ),
        ),
        migrations.AddConstraint(
            model_name="diddocumentversion",
            constraint=models.UniqueConstraint(
                condition=models.Q(("is_active", True)),
                fields=("identity",),
                name="did_version_single_active",
            ),
        ),
        migrations.AddConstraint(
            model_name="diddocumentversion",
            constraint=models.CheckConstraint(
                condition=models.Q(("sequence__gte", 1)), name="did_version_sequence_positive"
            ),
        ),
    ]
