from django.contrib import admin

from src.dids.models import DIDDocumentVersion


@admin.register(DIDDocumentVersion)
class DIDDocumentVersionAdmin(admin.ModelAdmin):
    list_display = ["identity", "sequence", "is_active", "owner", "created_at"]
    list_filter = ["is_active"]
    search_fields = ["identity", "owner"]
    ordering = ["identity", "-sequence"]
    # Versions are append-only; edits go through the registry services.
    readonly_fields = [
        "id",
        "identity",
        "sequence",
        "payload",
        "is_active",
        "owner",
        "created_at",
        "updated_at",
    ]

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
