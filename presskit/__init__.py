"""Presskit - markdown pages from a git repository, rendered, cached and summarized."""

from .api import app
from .models import Content
from .pages import PageService

__version__ = "1.0.0"

__all__ = [
    "Content",
    "PageService",
    "app",
]
