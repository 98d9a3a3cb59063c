from uuid import UUID

from django.db.models import QuerySet
from ninja import Query
from ninja_extra import api_controller, route

from news import schema
from news.models import Article
from news.service import articles


@api_controller("/news", tags=["News"])
class NewsController:
    @route.get("", url_name="list_news", response=list[schema.ArticleSchema])
    def list_news(self, filters: schema.ArticleListFilter = Query(...)) -> QuerySet[Article]:  # type: ignore[type-arg]
        """List published articles, newest first."""
        return articles.list_published(filters)

    @route.get("/{article_id}", url_name="get_news", response=schema.ArticleSchema)
    def get_news(self, article_id: UUID) -> Article:
        """Get a published article."""
        return articles.get_published(article_id)
