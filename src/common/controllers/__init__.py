from .media import MediaValidationController
from .unsplash import UnsplashController

__all__ = ["MediaValidationController", "UnsplashController"]
