import datetime as dt
import typing as t

import orjson
import pytest
from django.test.client import Client
from django.urls import reverse
from django.utils import timezone

from accounts.models import AdminAccount
from news.models import Article, ArticleVersion

pytestmark = pytest.mark.django_db


def _article(title: str, published: bool = True, days_ago: int = 0, **kwargs: t.Any) -> Article:
    return Article.objects.create(
        title_zh=f"{title}（中文）",
        title_en=title,
        published=published,
        published_at=timezone.now() - dt.timedelta(days=days_ago) if published else None,
        **kwargs,
    )


@pytest.fixture
def draft(admin_account: AdminAccount) -> ArticleVersion:
    return ArticleVersion.objects.create(
        title_zh="新春贺词",
        title_en="New Year Greetings",
        content_en="Happy new year!",
        cover_source="lanterns",
        created_by=admin_account,
    )


class TestPublicNews:
    def test_lists_published_articles_newest_first(self, client: Client) -> None:
        older = _article("Older", days_ago=3)
        newer = _article("Newer", days_ago=1)
        _article("Hidden", published=False)

        response = client.get(reverse("api:list_news"))

        assert response.status_code == 200
        assert [a["id"] for a in response.json()] == [str(newer.id), str(older.id)]

    def test_limit(self, client: Client) -> None:
        _article("Older", days_ago=3)
        newer = _article("Newer", days_ago=1)

        response = client.get(reverse("api:list_news"), {"limit": 1})

        assert [a["id"] for a in response.json()] == [str(newer.id)]

    def test_get_article_resolves_cover(self, client: Client) -> None:
        article = _article("Festival", cover_source="https://cdn.example.com/festival.jpg")

        response = client.get(reverse("api:get_news", kwargs={"article_id": article.id}))

        assert response.status_code == 200
        assert response.json()["cover_thumb_url"] == "https://cdn.example.com/festival.jpg"
        assert response.json()["cover_hero_url"] == "https://cdn.example.com/festival.jpg"

    def test_unpublished_article_is_not_found(self, client: Client) -> None:
        article = _article("Hidden", published=False)

        response = client.get(reverse("api:get_news", kwargs={"article_id": article.id}))

        assert response.status_code == 404
        assert response.json() == {"detail": "Not found"}


class TestDrafts:
    def test_save_draft_for_new_article(self, admin_client: Client, admin_account: AdminAccount) -> None:
        payload = {"title_zh": "通知", "title_en": "Notice", "content_zh": "内容"}

        response = admin_client.post(
            reverse("api:admin_save_draft"), data=orjson.dumps(payload), content_type="application/json"
        )

        assert response.status_code == 201, response.content
        data = response.json()
        assert data["version_number"] == 1
        assert data["status"] == "draft"
        assert data["article_id"] is None
        assert data["created_by_id"] == str(admin_account.id)

    def test_draft_of_existing_article_gets_next_version(self, admin_client: Client) -> None:
        article = _article("Notice")
        ArticleVersion.objects.create(article=article, title_zh="a", title_en="a", version_number=2)
        payload = {"id": str(article.id), "title_zh": "b", "title_en": "b"}

        response = admin_client.post(
            reverse("api:admin_save_draft"), data=orjson.dumps(payload), content_type="application/json"
        )

        assert response.json()["version_number"] == 3
        assert response.json()["article_id"] == str(article.id)

    def test_draft_of_unknown_article(self, admin_client: Client) -> None:
        payload = {"id": "00000000-0000-0000-0000-000000000000", "title_zh": "b", "title_en": "b"}

        response = admin_client.post(
            reverse("api:admin_save_draft"), data=orjson.dumps(payload), content_type="application/json"
        )

        assert response.status_code == 404
        assert response.json() == {"detail": "Article not found"}

    def test_list_drafts_excludes_published_versions(self, admin_client: Client, draft: ArticleVersion) -> None:
        ArticleVersion.objects.create(title_zh="x", title_en="x", status=ArticleVersion.Status.PUBLISHED)

        response = admin_client.get(reverse("api:admin_list_drafts"))

        assert [d["id"] for d in response.json()] == [str(draft.id)]

    def test_delete_draft(self, admin_client: Client, draft: ArticleVersion) -> None:
        response = admin_client.delete(reverse("api:admin_delete_draft", kwargs={"version_id": draft.id}))

        assert response.status_code == 204
        assert not ArticleVersion.objects.exists()

    def test_published_versions_cannot_be_deleted_as_drafts(self, admin_client: Client) -> None:
        version = ArticleVersion.objects.create(title_zh="x", title_en="x", status=ArticleVersion.Status.PUBLISHED)

        response = admin_client.delete(reverse("api:admin_delete_draft", kwargs={"version_id": version.id}))

        assert response.status_code == 404


class TestPublish:
    def test_publish_new_article(
        self, admin_client: Client, admin_account: AdminAccount, draft: ArticleVersion
    ) -> None:
        response = admin_client.post(
            reverse("api:admin_publish_news"),
            data=orjson.dumps({"version_id": str(draft.id)}),
            content_type="application/json",
        )

        assert response.status_code == 200, response.content
        article = Article.objects.get()
        assert article.published is True
        assert article.published_at is not None
        assert article.author == admin_account
        assert article.title_en == "New Year Greetings"
        draft.refresh_from_db()
        assert draft.status == ArticleVersion.Status.PUBLISHED
        assert draft.article == article
        assert response.json()["article"]["cover_thumb_url"] == "https://source.unsplash.com/800x600/?lanterns"
        assert response.json()["version"]["status"] == "published"

    def test_publish_updates_existing_article(self, admin_client: Client, admin_account: AdminAccount) -> None:
        article = _article("Old title", published=False)
        version = ArticleVersion.objects.create(article=article, title_zh="新标题", title_en="New title")

        admin_client.post(
            reverse("api:admin_publish_news"),
            data=orjson.dumps({"version_id": str(version.id)}),
            content_type="application/json",
        )

        article.refresh_from_db()
        assert article.title_en == "New title"
        assert article.published is True
        assert Article.objects.count() == 1

    def test_missing_version_id(self, admin_client: Client) -> None:
        response = admin_client.post(
            reverse("api:admin_publish_news"), data=orjson.dumps({}), content_type="application/json"
        )

        assert response.status_code == 400
        assert response.json() == {"detail": "Missing versionId"}

    def test_unknown_version(self, admin_client: Client) -> None:
        response = admin_client.post(
            reverse("api:admin_publish_news"),
            data=orjson.dumps({"version_id": "00000000-0000-0000-0000-000000000000"}),
            content_type="application/json",
        )

        assert response.status_code == 404
        assert response.json() == {"detail": "Draft not found"}


class TestAdminArticles:
    def test_list_includes_unpublished(self, admin_client: Client) -> None:
        _article("Live")
        _article("Hidden", published=False)

        response = admin_client.get(reverse("api:admin_list_news"))

        assert {a["title_en"] for a in response.json()} == {"Live", "Hidden"}

    def test_delete_article_keeps_drafts(self, admin_client: Client) -> None:
        article = _article("Live")
        version = ArticleVersion.objects.create(article=article, title_zh="x", title_en="x")

        response = admin_client.delete(reverse("api:admin_delete_news", kwargs={"article_id": article.id}))

        assert response.status_code == 204
        version.refresh_from_db()
        assert version.article is None

    def test_requires_admin(self, client: Client) -> None:
        assert client.get(reverse("api:admin_list_news")).status_code == 401
