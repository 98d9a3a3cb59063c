from django.contrib import admin
from unfold.admin import ModelAdmin, TabularInline

from events.models import Event, EventRegistration


class EventRegistrationInline(TabularInline):  # type: ignore[misc]
    model = EventRegistration
    extra = 0
    fields = ["name", "email", "tickets", "payment_method", "payment_status", "registration_date"]
    readonly_fields = ["registration_date"]
    show_change_link = True


@admin.register(Event)
class EventAdmin(ModelAdmin):  # type: ignore[misc]
    list_display = ["title_zh", "title_en", "event_date", "start_time", "location", "fee", "access_type", "published"]
    list_filter = ["published", "access_type", "event_date"]
    search_fields = ["title_zh", "title_en", "location"]
    date_hierarchy = "event_date"
    autocomplete_fields = ["created_by"]
    readonly_fields = ["created_at", "updated_at"]
    inlines = [EventRegistrationInline]


@admin.register(EventRegistration)
class EventRegistrationAdmin(ModelAdmin):  # type: ignore[misc]
    list_display = [
        "name",
        "event",
        "tickets",
        "payment_method",
        "payment_status",
        "amount_paid",
        "registration_date",
    ]
    list_filter = ["payment_method", "payment_status", "registration_date"]
    search_fields = ["name", "email", "phone", "event__title_zh", "event__title_en", "stripe_session_id"]
    list_select_related = ["event"]
    autocomplete_fields = ["event"]
    readonly_fields = ["stripe_session_id", "created_at", "updated_at"]
