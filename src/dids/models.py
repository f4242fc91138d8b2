from django.db import models
from django.db.models import Q

from src.common.models import BaseModel


class DIDDocumentVersion(BaseModel):
    """
    One immutable version of a W3C DID Document.

    Rows are never edited in place: a mutation flips the active row off and
    appends a new row with sequence + 1, inside one transaction.
    """

    identity = models.CharField(max_length=500, db_index=True, help_text="The DID this version belongs to")

    sequence = models.PositiveIntegerField(
        help_text="Strictly increasing per identity, starting at 1"
    )

    payload = models.JSONField(help_text="W3C DID Document JSON")

    is_active = models.BooleanField(
        default=True, help_text="At most one active version per identity"
    )

    owner = models.CharField(
        max_length=255, db_index=True, help_text="Principal holding mutation rights"
    )

    class Meta:
        ordering = ["identity", "sequence"]
        constraints = [
            models.UniqueConstraint(
                fields=["identity", "sequence"], name="did_version_sequence_unique"
            ),
            models.UniqueConstraint(
                fields=["identity"],
                condition=Q(is_active=True),
                name="did_version_single_active",
            ),
            models.CheckConstraint(
                condition=Q(sequence__gte=1), name="did_version_sequence_positive"
            ),
        ]

    def __str__(self):
        state = "active" if self.is_active else "inactive"
        return f"{self.identity}@v{self.sequence}({state})"
