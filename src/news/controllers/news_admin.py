from uuid import UUID

from django.db.models import QuerySet
from ninja_extra import ControllerBase, api_controller, route

from common.authentication import AdminJWTAuth
from common.throttling import WriteThrottle
from news import schema
from news.models import Article, ArticleVersion
from news.service import articles


@api_controller("/admin/news", auth=AdminJWTAuth(), tags=["News Admin"])
class NewsAdminController(ControllerBase):
    @route.get("", url_name="admin_list_news", response=list[schema.ArticleSchema])
    def list_articles(self) -> QuerySet[Article]:
        """List every article, published or not."""
        return articles.list_all()

    @route.delete("/{article_id}", url_name="admin_delete_news", response={204: None}, throttle=WriteThrottle())
    def delete_article(self, article_id: UUID) -> tuple[int, None]:
        """Delete an article. Its drafts are kept."""
        articles.delete_article(self.get_object_or_exception(Article, pk=article_id))
        return 204, None

    @route.get("/drafts", url_name="admin_list_drafts", response=list[schema.ArticleVersionSchema])
    def list_drafts(self) -> QuerySet[ArticleVersion]:
        """List unpublished drafts, most recently edited first."""
        return articles.list_drafts()

    @route.post(
        "/drafts", url_name="admin_save_draft", response={201: schema.ArticleVersionSchema}, throttle=WriteThrottle()
    )
    def save_draft(self, payload: schema.DraftSaveSchema) -> tuple[int, ArticleVersion]:
        """Save a draft. Pass the article's ``id`` to draft a new version of an existing article."""
        admin = self.context.request.user  # type: ignore[union-attr]
        return 201, articles.save_draft(payload, admin)  # type: ignore[arg-type]

    @route.delete(
        "/drafts/{version_id}", url_name="admin_delete_draft", response={204: None}, throttle=WriteThrottle()
    )
    def delete_draft(self, version_id: UUID) -> tuple[int, None]:
        """Delete a draft."""
        draft = self.get_object_or_exception(ArticleVersion, pk=version_id, status=ArticleVersion.Status.DRAFT)
        articles.delete_draft(draft)
        return 204, None

    @route.post("/publish", url_name="admin_publish_news", response=schema.PublishResponse, throttle=WriteThrottle())
    def publish(self, payload: schema.PublishSchema) -> schema.PublishResponse:
        """Publish a draft as the live version of its article."""
        admin = self.context.request.user  # type: ignore[union-attr]
        article, version = articles.publish(payload, admin)  # type: ignore[arg-type]
        return schema.PublishResponse(
            article=schema.ArticleSchema.from_orm(article), version=schema.ArticleVersionSchema.from_orm(version)
        )
