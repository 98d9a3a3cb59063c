"""The admin dashboard's recent activity feed.

Merges new registrations, membership applications and published news from the
last ``days`` days into one list, newest first.
"""

from datetime import datetime, timedelta

from django.utils import timezone

from activities.schema import ActivityAction, ActivityFeedFilter, ActivitySchema
from events.models import EventRegistration
from members.models import Member
from news.models import Article


def _registration_activities(since: datetime, cap: int) -> list[ActivitySchema]:
    registrations = (
        EventRegistration.objects.select_related("event").filter(created_at__gte=since).order_by("-created_at")[:cap]
    )
    activities = []
    for registration in registrations:
        title_zh = registration.event.title_zh
        title_en = registration.event.title_en
        activities.append(
            ActivitySchema(
                id=f"registration-{registration.pk}",
                type="registration",
                timestamp=registration.created_at,
                user=registration.name or "Guest",
                action=ActivityAction(
                    zh=f"报名了“{title_zh}”" if title_zh else "提交了活动报名",
                    en=f'registered for "{title_en}"' if title_en else "registered for an event",
                ),
                metadata={"event_id": str(registration.event_id), "title_zh": title_zh, "title_en": title_en},
            )
        )
    return activities


def _member_activities(since: datetime, cap: int) -> list[ActivitySchema]:
    members = Member.objects.filter(created_at__gte=since).order_by("-created_at")[:cap]
    return [
        ActivitySchema(
            id=f"member-{member.pk}",
            type="member",
            timestamp=member.created_at,
            user=member.chinese_name or member.english_name or "Member",
            action=ActivityAction(zh="提交了会员申请", en="submitted membership application"),
            metadata={
                "member_id": str(member.pk),
                "chinese_name": member.chinese_name,
                "english_name": member.english_name,
            },
        )
        for member in members
    ]


def _news_activities(since: datetime, cap: int) -> list[ActivitySchema]:
    articles = (
        Article.objects.select_related("author")
        .filter(published=True, published_at__gte=since)
        .order_by("-published_at")[:cap]
    )
    return [
        ActivitySchema(
            id=f"news-{article.pk}",
            type="news",
            timestamp=article.published_at,
            user=article.author.username if article.author else "Admin",
            action=ActivityAction(
                zh=f"发布了新闻“{article.title_zh}”" if article.title_zh else "发布了新闻",
                en=f'published news "{article.title_en}"' if article.title_en else "published news",
            ),
            metadata={"article_id": str(article.pk), "title_zh": article.title_zh, "title_en": article.title_en},
        )
        for article in articles
    ]


def recent_activities(filters: ActivityFeedFilter) -> list[ActivitySchema]:
    since = timezone.now() - timedelta(days=filters.days)
    cap = max(filters.limit * 3, filters.limit)
    activities = [
        *_registration_activities(since, cap),
        *_member_activities(since, cap),
        *_news_activities(since, cap),
    ]
    activities.sort(key=lambda activity: activity.timestamp, reverse=True)
    return activities[: filters.limit]
