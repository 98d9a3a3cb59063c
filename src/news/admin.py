from django.contrib import admin
from unfold.admin import ModelAdmin

from news.models import Article, ArticleVersion


@admin.register(Article)
class ArticleAdmin(ModelAdmin):  # type: ignore[misc]
    list_display = ["title_zh", "title_en", "published", "published_at", "author"]
    list_filter = ["published", "published_at"]
    search_fields = ["title_zh", "title_en"]
    autocomplete_fields = ["author"]
    readonly_fields = ["created_at", "updated_at"]


@admin.register(ArticleVersion)
class ArticleVersionAdmin(ModelAdmin):  # type: ignore[misc]
    list_display = ["title_zh", "title_en", "version_number", "status", "article", "updated_at"]
    list_filter = ["status"]
    search_fields = ["title_zh", "title_en"]
    autocomplete_fields = ["article", "created_by"]
    readonly_fields = ["created_at", "updated_at"]
