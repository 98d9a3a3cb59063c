import datetime as dt
import typing as t

from ninja import Schema
from pydantic import Field

ActivityType = t.Literal["registration", "member", "news"]


class ActivityAction(Schema):
    zh: str
    en: str


class ActivitySchema(Schema):
    id: str
    type: ActivityType
    timestamp: dt.datetime
    user: str
    action: ActivityAction
    metadata: dict[str, t.Any]


class ActivityFeedFilter(Schema):
    limit: int = Field(5, ge=1, le=100)
    days: int = Field(7, ge=1, le=365)


class ActivityFeedResponse(Schema):
    activities: list[ActivitySchema]
