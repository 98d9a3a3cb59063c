from .news import NewsController
from .news_admin import NewsAdminController

__all__ = ["NewsAdminController", "NewsController"]
