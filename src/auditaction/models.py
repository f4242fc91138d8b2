from django.db import models
from src.common.models import BaseModel


class AuditCategory(models.TextChoices):
    DID = "DID", "DID"
    SYSTEM = "SYSTEM", "System"


class Severity(models.TextChoices):
    INFO = "INFO", "Info"
    WARNING = "WARNING", "Warning"
    ERROR = "ERROR", "Error"


class AuditAction(models.TextChoices):
    DID_CREATED = "DID_CREATED", "DID created"
    DID_READ = "DID_READ", "DID document read"
    DID_HISTORY_READ = "DID_HISTORY_READ", "DID history read"
    DID_UPDATED = "DID_UPDATED", "DID document updated"
    DID_DEACTIVATED = "DID_DEACTIVATED", "DID deactivated"


class AuditLog(BaseModel):
    """
    Access journal for DID operations. Written by the API layer after an
    operation succeeds, never by the document store itself.
    """

    principal = models.CharField(max_length=255, blank=True, db_index=True)

    category = models.CharField(
        max_length=32, choices=AuditCategory.choices, default=AuditCategory.SYSTEM
    )
    action = models.CharField(max_length=50, choices=AuditAction.choices, db_index=True)

    target_type = models.CharField(
        max_length=50,
        blank=True,
        help_text="Resource type: 'did', 'did_history'",
    )
    target_id = models.CharField(
        max_length=500, blank=True, null=True, db_index=True, help_text="Affected resource id (the DID)"
    )

    details = models.JSONField(default=dict, blank=True)
    severity = models.CharField(
        max_length=16, choices=Severity.choices, default=Severity.INFO
    )

    # Request metadata
    ip_address = models.GenericIPAddressField(null=True, blank=True)
    user_agent = models.TextField(blank=True)
    request_id = models.CharField(max_length=64, blank=True)

    class Meta:
        db_table = "audit_logs"
        ordering = ["-created_at"]
