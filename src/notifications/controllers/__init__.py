from .notifications import NotificationController

__all__ = ["NotificationController"]
