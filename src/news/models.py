from django.conf import settings
from django.db import models
from django.db.models import F

from common.models import TimeStampedModel


class ArticleContent(models.Model):
    """The bilingual fields shared by articles and their draft versions."""

    title_zh = models.CharField(max_length=255)
    title_en = models.CharField(max_length=255)
    summary_zh = models.TextField(null=True, blank=True)
    summary_en = models.TextField(null=True, blank=True)
    content_zh = models.TextField(null=True, blank=True)
    content_en = models.TextField(null=True, blank=True)
    cover_source = models.CharField(
        max_length=1024, null=True, blank=True, help_text="Image URL, path or Unsplash keyword."
    )

    CONTENT_FIELDS = (
        "title_zh",
        "title_en",
        "summary_zh",
        "summary_en",
        "content_zh",
        "content_en",
        "cover_source",
    )

    class Meta:
        abstract = True


class ArticleQuerySet(models.QuerySet["Article"]):
    def published(self) -> "ArticleQuerySet":
        return self.filter(published=True).order_by(F("published_at").desc(nulls_last=True))


class Article(TimeStampedModel, ArticleContent):
    published = models.BooleanField(default=False, db_index=True)
    published_at = models.DateTimeField(null=True, blank=True, db_index=True)
    author = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name="articles"
    )

    objects = ArticleQuerySet.as_manager()

    class Meta:
        ordering = [F("published_at").desc(nulls_last=True), "-created_at"]

    def __str__(self) -> str:
        return self.title_en or self.title_zh


class ArticleVersion(TimeStampedModel, ArticleContent):
    """A saved draft of a new or existing article."""

    class Status(models.TextChoices):
        DRAFT = "draft", "Draft"
        PUBLISHED = "published", "Published"

    article = models.ForeignKey(Article, on_delete=models.SET_NULL, null=True, blank=True, related_name="versions")
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.DRAFT, db_index=True)
    version_number = models.PositiveIntegerField(default=1)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name="article_versions"
    )

    class Meta:
        ordering = ["-updated_at"]

    def __str__(self) -> str:
        return f"{self.title_en or self.title_zh} v{self.version_number}"
