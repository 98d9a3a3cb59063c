import typing as t

from django.contrib import admin
from unfold.admin import ModelAdmin

from . import models


@admin.register(models.SiteSettings)
class SiteSettingsAdmin(ModelAdmin):  # type: ignore[misc]
    list_display = ["__str__", "live_emails", "admin_notification_email", "updated_at"]
    readonly_fields = ["created_at", "updated_at"]
    fieldsets = (
        ("Emails", {"fields": ("live_emails", "admin_notification_email", "internal_catchall_email")}),
        ("URLs", {"fields": ("frontend_base_url",)}),
        ("Timestamps", {"fields": ("created_at", "updated_at")}),
    )


@admin.register(models.EmailLog)
class EmailLogAdmin(ModelAdmin):  # type: ignore[misc]
    list_display = ["to", "subject", "sent_at", "test_only"]
    list_filter = ["test_only", "sent_at"]
    search_fields = ["to", "subject"]
    readonly_fields = ["id", "created_at", "updated_at", "sent_at", "body", "html"]
    date_hierarchy = "sent_at"
    ordering = ["-sent_at"]

    def has_add_permission(self, request: t.Any) -> bool:
        return False

    def has_change_permission(self, request: t.Any, obj: t.Any = None) -> bool:
        return False
