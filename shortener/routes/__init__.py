"""Routes module for URL shortener API endpoints."""

from .redirect import redirect_bp
from .urls import urls_bp

__all__ = [
    "redirect_bp",
    "urls_bp",
]
