"""Watchtower Online Library search tool."""

from wolsearch.tools.wol.errors import (
    CountParseError,
    EngineInitError,
    NavigationTimeoutError,
    NotInitializedError,
    PerResultExtractionError,
    ResultsNotFoundError,
    WolSearchError,
)
from wolsearch.tools.wol.extractor import ResultExtractor
from wolsearch.tools.wol.models import SearchRequest, SearchResponse, SearchResult
from wolsearch.tools.wol.service import WolSearchService
from wolsearch.tools.wol.session import EngineSession
from wolsearch.tools.wol.tool import WolSearchTool

__all__ = [
    "CountParseError",
    "EngineInitError",
    "EngineSession",
    "NavigationTimeoutError",
    "NotInitializedError",
    "PerResultExtractionError",
    "ResultExtractor",
    "ResultsNotFoundError",
    "SearchRequest",
    "SearchResponse",
    "SearchResult",
    "WolSearchError",
    "WolSearchService",
    "WolSearchTool",
]
