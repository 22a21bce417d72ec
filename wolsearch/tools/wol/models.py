"""Models for WOL search requests and results."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

MIN_RESULTS = 1
MAX_RESULTS = 10
DEFAULT_RESULTS = 5

NO_TITLE = "No title"
NO_LINK = "No link"


def clamp_limit(value: Any, default: int = DEFAULT_RESULTS) -> int:
    """Coerce a requested result count into [MIN_RESULTS, MAX_RESULTS]."""
    try:
        limit = int(value)
    except (TypeError, ValueError):
        limit = default
    return max(MIN_RESULTS, min(MAX_RESULTS, limit))


@dataclass(frozen=True, slots=True)
class SearchRequest:
    """A single search against the library. ``max_results`` is always clamped."""

    query: str
    max_results: int = DEFAULT_RESULTS
    search_type: str = "par"
    sort_by: str = "occ"

    def __post_init__(self) -> None:
        query = str(self.query or "").strip()
        if not query:
            raise ValueError("query must not be empty")
        object.__setattr__(self, "query", query)
        object.__setattr__(self, "max_results", clamp_limit(self.max_results))


@dataclass(slots=True)
class SearchResult:
    """One scraped result entry."""

    title: str
    link: str
    publication: str = ""
    occurrences: str = ""
    year: str = ""
    snippet: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "link": self.link,
            "publication": self.publication,
            "occurrences": self.occurrences,
            "year": self.year,
            "snippet": self.snippet,
        }


@dataclass(slots=True)
class SearchResponse:
    """Outcome of one search.

    Use ``succeeded`` / ``failed`` to build instances: a failed response
    never carries results or a total, a successful one never carries an error.
    """

    query: str
    search_url: str
    success: bool
    total_results: int = 0
    results: list[SearchResult] = field(default_factory=list)
    error: str = ""

    @classmethod
    def succeeded(
        cls,
        *,
        query: str,
        search_url: str,
        results: list[SearchResult],
        total_results: int,
    ) -> "SearchResponse":
        return cls(
            query=query,
            search_url=search_url,
            success=True,
            total_results=max(0, int(total_results)),
            results=list(results),
            error="",
        )

    @classmethod
    def failed(cls, *, query: str, search_url: str, error: str) -> "SearchResponse":
        return cls(
            query=query,
            search_url=search_url,
            success=False,
            total_results=0,
            results=[],
            error=error or "unknown error",
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "query": self.query,
            "totalResults": self.total_results,
            "results": [result.to_dict() for result in self.results],
            "searchUrl": self.search_url,
            "success": self.success,
            "error": self.error,
        }
