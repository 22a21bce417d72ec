"""WOL search tool exposed to the assistant."""

from __future__ import annotations

from typing import Any

from loguru import logger

from wolsearch.tools.base import Tool
from wolsearch.tools.wol.models import (
    DEFAULT_RESULTS,
    MAX_RESULTS,
    MIN_RESULTS,
    SearchResponse,
    clamp_limit,
)
from wolsearch.tools.wol.service import WolSearchService

EMPTY_QUERY_MESSAGE = "❌ Please provide a search term or topic."


class WolSearchTool(Tool):
    """Search the Watchtower Online Library and format results as text."""

    name = "search"
    description = (
        "Search Watchtower Online Library (WOL) for Bible study materials, "
        "publications, and Jehovah's Witnesses content."
    )
    parameters = {
        "type": "object",
        "properties": {
            "message": {
                "type": "string",
                "description": "Search term or topic to look for in WOL",
            },
            "limit": {
                "type": "integer",
                "description": (
                    f"Maximum number of results ({MIN_RESULTS}-{MAX_RESULTS}, "
                    f"default: {DEFAULT_RESULTS})"
                ),
            },
        },
        "required": ["message"],
    }

    def __init__(self, service: WolSearchService):
        self._service = service

    async def execute(self, message: str = "", limit: int = DEFAULT_RESULTS, **kwargs: Any) -> str:
        query = (message or "").strip()
        if not query:
            return EMPTY_QUERY_MESSAGE

        try:
            await self._service.initialize()
            request = self._service.new_request(query, clamp_limit(limit))
            response = await self._service.search(request)
        except Exception as e:
            logger.error("WOL search tool failed: {}", e)
            return f"❌ Search failed: {e}"

        return format_response(message, response)


def format_response(message: str, response: SearchResponse) -> str:
    """Render a response as the text block shown to the assistant."""
    if not response.success:
        return f"❌ Search failed: {response.error}"

    if not response.results:
        return f"❌ No results found for '{message}' in the Watchtower Online Library."

    count = len(response.results)
    lines = [f"🔍 **WOL Search Results for '{message}'** (Found {count} results)", ""]
    for i, result in enumerate(response.results, 1):
        lines.append(f"**{i}. {result.title}**")
        lines.append(f"   📖 Publication: {result.publication}")
        lines.append(f"   🔗 Link: {result.link}")
        if result.occurrences:
            lines.append(f"   📊 {result.occurrences}")
        if result.snippet:
            lines.append(f"   📝 Preview: {result.snippet}")
        lines.append("")

    lines.append(f"✅ Search completed successfully. Found {count} relevant publications.")
    return "\n".join(lines)
