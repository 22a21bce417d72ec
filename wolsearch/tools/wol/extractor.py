"""Result extraction from a rendered WOL search results page."""

from __future__ import annotations

import re
from collections.abc import AsyncIterator
from typing import Any
from urllib.parse import quote

from loguru import logger

from wolsearch.tools.wol.errors import CountParseError, PerResultExtractionError
from wolsearch.tools.wol.models import NO_LINK, NO_TITLE, SearchRequest, SearchResult

RESULT_SELECTOR = ".results.resultContentDocument"
TITLE_SELECTOR = ".caption .lnk"
PUBLICATION_SELECTOR = ".ref"
OCCURRENCES_SELECTOR = ".count"
SNIPPET_SELECTOR = ".searchResult .document"
RESULTS_COUNT_SELECTOR = "#resultsCount"

SNIPPET_MAX_CHARS = 200
ELLIPSIS = "..."

# "Watchtower—2017": a year appended to the publication with an em-dash
_DASHED_YEAR = re.compile(r"—(\d{4})(?!\d)")
_ANY_YEAR = re.compile(r"\b(\d{4})\b")
# "1651 results ( Located in the same paragraph )."
_TOTAL_RESULTS = re.compile(r"(\d[\d,]*)\s+results", re.IGNORECASE)


def extract_year(publication: str) -> str:
    """Best-effort year from a free-text publication label."""
    if not publication:
        return ""
    match = _DASHED_YEAR.search(publication) or _ANY_YEAR.search(publication)
    return match.group(1) if match else ""


def truncate_snippet(text: str | None, max_chars: int = SNIPPET_MAX_CHARS) -> str:
    """Cut to ``max_chars`` with a trailing ellipsis; short text is only trimmed."""
    snippet = text or ""
    if len(snippet) > max_chars:
        return snippet[:max_chars].strip() + ELLIPSIS
    return snippet.strip()


def parse_total_results(text: str | None) -> int:
    """Parse the leading count out of the results indicator text."""
    match = _TOTAL_RESULTS.search(text or "")
    if not match:
        raise CountParseError(f"no result count in {text!r}")
    try:
        return int(match.group(1).replace(",", ""))
    except ValueError as e:
        raise CountParseError(f"invalid result count {match.group(1)!r}") from e


def build_result_link(base_url: str, href: str | None, query: str) -> str:
    """Absolute link that opens the document on the matching paragraph."""
    href = (href or "").strip()
    if not href:
        return NO_LINK
    url = href if href.startswith(("http://", "https://")) else f"{base_url.rstrip('/')}{href}"
    sep = "&" if "?" in url else "?"
    return f"{url}{sep}q={quote(query, safe='')}&p=par"


async def _optional_text(node: Any, selector: str) -> str | None:
    """Text of a sub-element, or None when the sub-element is absent."""
    element = await node.query_selector(selector)
    if element is None:
        return None
    return await element.text_content()


class ResultExtractor:
    """Turns result nodes of a loaded page into ``SearchResult`` records."""

    def __init__(self, base_url: str):
        self.base_url = base_url

    async def extract(self, page: Any, request: SearchRequest) -> list[SearchResult]:
        """Collect up to ``request.max_results`` results in document order."""
        return [result async for result in self.iter_results(page, request)]

    async def iter_results(self, page: Any, request: SearchRequest) -> AsyncIterator[SearchResult]:
        nodes = await page.query_selector_all(RESULT_SELECTOR)
        logger.debug("Found {} document result sections", len(nodes))

        collected = 0
        for index, node in enumerate(nodes, start=1):
            if collected >= request.max_results:
                break
            try:
                result = await self._read_node(node, request)
            except Exception as e:
                error = PerResultExtractionError(index, e)
                logger.warning("Skipping unreadable result: {}", error)
                continue
            if result is None:
                continue
            collected += 1
            yield result

    async def _read_node(self, node: Any, request: SearchRequest) -> SearchResult | None:
        title_link = await node.query_selector(TITLE_SELECTOR)
        if title_link is None:
            return None

        title = (await title_link.text_content() or "").strip() or NO_TITLE
        href = await title_link.get_attribute("href")
        publication = (await _optional_text(node, PUBLICATION_SELECTOR) or "").strip()
        occurrences = (await _optional_text(node, OCCURRENCES_SELECTOR) or "").strip()
        snippet = truncate_snippet(await _optional_text(node, SNIPPET_SELECTOR))

        return SearchResult(
            title=title,
            link=build_result_link(self.base_url, href, request.query),
            publication=publication,
            occurrences=occurrences,
            year=extract_year(publication),
            snippet=snippet,
        )

    async def total_results(self, page: Any) -> int:
        """Total reported by the site, 0 when it cannot be read."""
        try:
            element = await page.query_selector(RESULTS_COUNT_SELECTOR)
            if element is None:
                logger.debug("Results count element not found")
                return 0
            return parse_total_results(await element.text_content())
        except Exception as e:
            logger.warning("Failed to get total results count: {}", e)
            return 0
