from django.contrib import admin

from ticketing.models import StoredDocument


@admin.register(StoredDocument)
class StoredDocumentAdmin(admin.ModelAdmin):
    list_display = ["document_id", "collection", "created_at", "updated_at"]
    list_filter = ["collection"]
    search_fields = ["document_id"]
    readonly_fields = ["created_at", "updated_at"]
