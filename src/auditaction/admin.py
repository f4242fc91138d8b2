from django.contrib import admin
from src.auditaction.models import AuditLog


@admin.register(AuditLog)
class AuditLogAdmin(admin.ModelAdmin):
    list_display = (
        "created_at",
        "action",
        "principal",
        "target_id",
        "severity",
        "ip_address",
    )
    list_filter = ("category", "action", "severity")
    search_fields = ("principal", "target_id", "request_id")
    readonly_fields = (
        "created_at",
        "updated_at",
        "principal",
        "category",
        "action",
        "severity",
        "target_type",
        "target_id",
        "details",
        "ip_address",
        "user_agent",
        "request_id",
    )
    ordering = ("-created_at",)
    date_hierarchy = "created_at"

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False
