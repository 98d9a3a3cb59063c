import structlog
from django.db import transaction
from django.db.models import Max, QuerySet
from django.utils import timezone
from django.utils.translation import gettext_lazy as _
from ninja.errors import HttpError

from accounts.models import AdminAccount
from news import schema
from news.models import Article, ArticleVersion

logger = structlog.get_logger(__name__)


def list_published(filters: schema.ArticleListFilter) -> QuerySet[Article]:
    """Published articles, newest first."""
    qs = Article.objects.published()
    if filters.limit:
        qs = qs[: filters.limit]
    return qs


def get_published(article_id: object) -> Article:
    try:
        return Article.objects.published().get(pk=article_id)
    except Article.DoesNotExist as e:
        raise HttpError(404, str(_("Not found"))) from e


def list_all() -> QuerySet[Article]:
    return Article.objects.all()


def delete_article(article: Article) -> None:
    logger.info("article_deleted", article_id=str(article.pk))
    article.delete()


def list_drafts() -> QuerySet[ArticleVersion]:
    """Unpublished drafts, most recently edited first."""
    return ArticleVersion.objects.filter(status=ArticleVersion.Status.DRAFT).order_by("-updated_at")


@transaction.atomic
def save_draft(payload: schema.DraftSaveSchema, admin: AdminAccount) -> ArticleVersion:
    """Store a new draft version.

    Drafts of an existing article get the next version number; drafts of a new article start at 1.

    Raises:
        HttpError: 404 when ``id`` names an article that doesn't exist.
    """
    article = None
    version_number = 1
    if payload.id:
        article = Article.objects.select_for_update().filter(pk=payload.id).first()
        if article is None:
            raise HttpError(404, str(_("Article not found")))
        latest = article.versions.aggregate(latest=Max("version_number"))["latest"]
        version_number = (latest or 0) + 1

    draft = ArticleVersion.objects.create(
        article=article,
        status=ArticleVersion.Status.DRAFT,
        version_number=version_number,
        created_by=admin,
        **payload.model_dump(exclude={"id"}),
    )
    logger.info(
        "article_draft_saved",
        version_id=str(draft.pk),
        article_id=str(article.pk) if article else None,
        version_number=version_number,
    )
    return draft


def delete_draft(draft: ArticleVersion) -> None:
    logger.info("article_draft_deleted", version_id=str(draft.pk))
    draft.delete()


@transaction.atomic
def publish(payload: schema.PublishSchema, admin: AdminAccount) -> tuple[Article, ArticleVersion]:
    """Publish a draft, creating its article when it doesn't have one yet.

    Raises:
        HttpError: 400 without a version id, 404 for an unknown version.
    """
    if not payload.version_id:
        raise HttpError(400, str(_("Missing versionId")))
    version = ArticleVersion.objects.select_for_update().filter(pk=payload.version_id).first()
    if version is None:
        raise HttpError(404, str(_("Draft not found")))

    content = {field: getattr(version, field) for field in Article.CONTENT_FIELDS}
    article = version.article
    if article is None:
        article = Article(author=admin, **content)
    else:
        for field, value in content.items():
            setattr(article, field, value)
    article.published = True
    article.published_at = timezone.now()
    article.save()

    version.article = article
    version.status = ArticleVersion.Status.PUBLISHED
    version.save(update_fields=["article", "status", "updated_at"])
    logger.info("article_published", article_id=str(article.pk), version_id=str(version.pk), admin_id=str(admin.pk))
    return article, version
