"""Search orchestration against the Watchtower Online Library."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any
from urllib.parse import quote

from loguru import logger
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from wolsearch.tools.wol.errors import (
    NavigationTimeoutError,
    NotInitializedError,
    ResultsNotFoundError,
    WolSearchError,
)
from wolsearch.tools.wol.extractor import RESULT_SELECTOR, ResultExtractor
from wolsearch.tools.wol.models import SearchRequest, SearchResponse
from wolsearch.tools.wol.session import EngineSession

if TYPE_CHECKING:
    from wolsearch.config.schema import WolConfig


class WolSearchService:
    """Drive the browser to a results page and turn it into a response.

    The engine session is passed in and owned by whoever created it; the
    service starts it in ``initialize`` and closes it in ``shutdown``.
    """

    def __init__(
        self,
        session: EngineSession,
        wol_config: WolConfig | None = None,
        extractor: ResultExtractor | None = None,
    ):
        self.session = session
        self.config = wol_config or session.config
        self.extractor = extractor or ResultExtractor(self.config.base_url)

    async def __aenter__(self) -> "WolSearchService":
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.shutdown()

    @property
    def is_initialized(self) -> bool:
        return self.session.is_started

    async def initialize(self) -> None:
        """Start the browser engine. Raises EngineInitError on failure."""
        if self.session.is_started:
            return
        await self.session.start()
        logger.info("WOL search service ready (headless={})", self.config.headless)

    async def shutdown(self) -> None:
        await self.session.close()
        logger.info("WOL search service stopped")

    def build_search_url(self, request: SearchRequest) -> str:
        params = (
            ("q", request.query),
            ("p", request.search_type),
            ("r", request.sort_by),
            ("st", "a"),
        )
        query_string = "&".join(f"{key}={quote(value, safe='')}" for key, value in params)
        return f"{self.config.base_url}{self.config.search_path}?{query_string}"

    def new_request(self, query: str, max_results: int) -> SearchRequest:
        """Request using the configured search type and sort mode."""
        return SearchRequest(
            query=query,
            max_results=max_results,
            search_type=self.config.search_type,
            sort_by=self.config.sort_by,
        )

    async def search(self, request: SearchRequest) -> SearchResponse:
        """Run one search. Failures come back as ``success=False`` responses."""
        if not self.session.is_started:
            raise NotInitializedError("WOL search service not initialized; call initialize() first")

        search_url = self.build_search_url(request)
        try:
            context = await self.session.new_context()
            try:
                page = await context.new_page()
                try:
                    return await self._search_page(page, request, search_url)
                finally:
                    await _close_quietly(page, "page")
            finally:
                await _close_quietly(context, "context")
        except (WolSearchError, PlaywrightError) as e:
            logger.error("WOL search failed for query '{}': {}", request.query, e)
            return SearchResponse.failed(query=request.query, search_url=search_url, error=str(e))
        except Exception as e:
            logger.exception("Unexpected error during WOL search for query '{}'", request.query)
            return SearchResponse.failed(query=request.query, search_url=search_url, error=str(e))

    async def _search_page(self, page: Any, request: SearchRequest, search_url: str) -> SearchResponse:
        timeout_ms = self.config.timeout_ms

        logger.debug("Navigating to WOL search: {}", search_url)
        try:
            await page.goto(search_url, timeout=timeout_ms)
        except PlaywrightTimeoutError as e:
            raise NavigationTimeoutError(
                f"page did not load within {timeout_ms}ms: {search_url}"
            ) from e

        try:
            await page.wait_for_selector(RESULT_SELECTOR, timeout=timeout_ms)
        except PlaywrightTimeoutError as e:
            raise ResultsNotFoundError(
                f"no search results appeared within {timeout_ms}ms"
            ) from e

        results = await self.extractor.extract(page, request)
        total_results = await self.extractor.total_results(page)

        logger.info(
            "Extracted {} results (of {}) for query '{}'",
            len(results),
            total_results,
            request.query,
        )
        return SearchResponse.succeeded(
            query=request.query,
            search_url=search_url,
            results=results,
            total_results=total_results,
        )


async def _close_quietly(resource: Any, label: str) -> None:
    try:
        await resource.close()
    except Exception as e:
        logger.warning("Error closing browser {}: {}", label, e)
