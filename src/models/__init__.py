"""Data models for Confluence pages and spaces."""

from src.models.confluence_page import ConfluencePage
from src.models.space import Space

__all__ = ['ConfluencePage', 'Space']
