from django.contrib import admin
from unfold.admin import ModelAdmin

from members.models import Member, MemberVerificationCode


@admin.register(Member)
class MemberAdmin(ModelAdmin):  # type: ignore[misc]
    list_display = ["chinese_name", "english_name", "email", "phone", "status", "apply_date", "handled_by"]
    list_filter = ["status", "gender", "apply_date"]
    search_fields = ["chinese_name", "english_name", "email", "phone"]
    autocomplete_fields = ["handled_by"]
    readonly_fields = ["created_at", "updated_at"]
    date_hierarchy = "apply_date"


@admin.register(MemberVerificationCode)
class MemberVerificationCodeAdmin(ModelAdmin):  # type: ignore[misc]
    list_display = ["email", "expires_at", "created_at"]
    search_fields = ["email"]
    readonly_fields = ["email", "code_hash", "expires_at", "created_at", "updated_at"]
