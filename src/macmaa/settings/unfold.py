"""Django Unfold admin configuration."""

from django.urls import reverse_lazy
from django.utils.translation import gettext_lazy as _

from .base import SITE_NAME, VERSION

UNFOLD = {
    "SITE_TITLE": f"{SITE_NAME} v{VERSION} Admin",
    "SITE_HEADER": f"{SITE_NAME} v{VERSION} Administration",
    "SITE_URL": "/",
    "SHOW_HISTORY": True,
    "SHOW_VIEW_ON_SITE": False,
    "COLORS": {
        "primary": {
            "50": "254 242 242",
            "100": "254 226 226",
            "200": "254 202 202",
            "300": "252 165 165",
            "400": "248 113 113",
            "500": "239 68 68",
            "600": "220 38 38",
            "700": "185 28 28",
            "800": "153 27 27",
            "900": "127 29 29",
            "950": "69 10 10",
        },
    },
    "SIDEBAR": {
        "show_search": True,
        "show_all_applications": False,
        "navigation": [
            {
                "title": _("Dashboard"),
                "separator": False,
                "items": [
                    {
                        "title": _("Dashboard"),
                        "icon": "home",
                        "link": reverse_lazy("admin:index"),
                    },
                ],
            },
            {
                "title": _("Admin Accounts"),
                "separator": True,
                "collapsible": True,
                "items": [
                    {
                        "title": _("Admin Accounts"),
                        "icon": "person",
                        "link": reverse_lazy("admin:accounts_adminaccount_changelist"),
                    },
                ],
            },
            {
                "title": _("Events"),
                "separator": True,
                "collapsible": True,
                "items": [
                    {
                        "title": _("Events"),
                        "icon": "event",
                        "link": reverse_lazy("admin:events_event_changelist"),
                    },
                    {
                        "title": _("Registrations"),
                        "icon": "confirmation_number",
                        "link": reverse_lazy("admin:events_eventregistration_changelist"),
                    },
                ],
            },
            {
                "title": _("Members"),
                "separator": True,
                "collapsible": True,
                "items": [
                    {
                        "title": _("Members"),
                        "icon": "groups",
                        "link": reverse_lazy("admin:members_member_changelist"),
                    },
                    {
                        "title": _("Verification Codes"),
                        "icon": "pin",
                        "link": reverse_lazy("admin:members_memberverificationcode_changelist"),
                    },
                ],
            },
            {
                "title": _("News"),
                "separator": True,
                "collapsible": True,
                "items": [
                    {
                        "title": _("Articles"),
                        "icon": "article",
                        "link": reverse_lazy("admin:news_article_changelist"),
                    },
                    {
                        "title": _("Drafts"),
                        "icon": "edit_note",
                        "link": reverse_lazy("admin:news_articleversion_changelist"),
                    },
                ],
            },
            {
                "title": _("System"),
                "separator": True,
                "collapsible": True,
                "items": [
                    {
                        "title": _("Site Settings"),
                        "icon": "settings",
                        "link": reverse_lazy("admin:common_sitesettings_changelist"),
                    },
                    {
                        "title": _("Email Logs"),
                        "icon": "mail",
                        "link": reverse_lazy("admin:common_emaillog_changelist"),
                    },
                ],
            },
        ],
    },
}
