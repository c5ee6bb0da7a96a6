"""
Core client components: pagination, query parameters, JSON:API parsing
and the HTTP client subpackage.
"""

from .jsonapi import JsonApiResource, Page, PageLinks, PageMeta, build_document
from .pagination import fetch_all, stream
from .query import PaginationOptions, QueryParameters, parse_where

__all__ = [
    "JsonApiResource",
    "Page",
    "PageLinks",
    "PageMeta",
    "build_document",
    "fetch_all",
    "stream",
    "PaginationOptions",
    "QueryParameters",
    "parse_where",
]
