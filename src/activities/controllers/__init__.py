from .activities import ActivityController

__all__ = ["ActivityController"]
