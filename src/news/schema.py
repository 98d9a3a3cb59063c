from uuid import UUID

from ninja import ModelSchema, Schema
from pydantic import Field

from common.schema import OneToTwoFiftyFiveString
from common.utils import resolve_news_cover
from news import models

CONTENT_FIELDS = list(models.ArticleContent.CONTENT_FIELDS)


class ArticleSchema(ModelSchema):
    author_id: UUID | None = None
    cover_thumb_url: str
    cover_hero_url: str

    class Meta:
        model = models.Article
        fields = ["id", *CONTENT_FIELDS, "published", "published_at", "created_at", "updated_at"]

    @staticmethod
    def resolve_cover_thumb_url(obj: models.Article) -> str:
        return resolve_news_cover(obj.cover_source, "thumb")

    @staticmethod
    def resolve_cover_hero_url(obj: models.Article) -> str:
        return resolve_news_cover(obj.cover_source, "hero")


class ArticleVersionSchema(ModelSchema):
    article_id: UUID | None = None
    created_by_id: UUID | None = None

    class Meta:
        model = models.ArticleVersion
        fields = ["id", *CONTENT_FIELDS, "status", "version_number", "created_at", "updated_at"]


class ArticleListFilter(Schema):
    limit: int | None = Field(None, ge=1, le=200)


class DraftSaveSchema(Schema):
    id: UUID | None = Field(None, description="The article this draft edits; empty for a new article.")
    title_zh: OneToTwoFiftyFiveString
    title_en: OneToTwoFiftyFiveString
    summary_zh: str | None = None
    summary_en: str | None = None
    content_zh: str | None = None
    content_en: str | None = None
    cover_source: str | None = None


class PublishSchema(Schema):
    version_id: UUID | None = None


class PublishResponse(Schema):
    article: ArticleSchema
    version: ArticleVersionSchema
