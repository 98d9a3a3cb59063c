"""Admin interface for admin accounts."""

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin
from unfold.admin import ModelAdmin

from accounts.models import AdminAccount


@admin.register(AdminAccount)
class AdminAccountAdmin(UserAdmin, ModelAdmin):  # type: ignore[type-arg,misc]
    """Admin for dashboard accounts. Owners get Django admin access as superusers."""

    list_display = ["username", "email", "role", "status", "is_staff", "date_joined", "last_login"]
    list_filter = ["role", "status", "is_staff", "date_joined", "last_login"]
    search_fields = ["username", "email"]
    ordering = ["date_joined"]
    readonly_fields = ["id", "date_joined", "last_login"]

    fieldsets = (
        ("Account", {"fields": ("id", ("username", "email"), "password")}),
        ("Access", {"fields": (("role", "status"), ("is_staff", "is_superuser"))}),
        ("Activity", {"fields": (("date_joined", "last_login"),)}),
    )
    add_fieldsets = (
        (
            None,
            {
                "classes": ("wide",),
                "fields": ("username", "email", "role", "password1", "password2"),
            },
        ),
    )
