import asyncio
from urllib.parse import parse_qsl, urlsplit

import pytest
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from fakes import FakePage, FakeSession, make_node
from wolsearch.config.schema import WolConfig
from wolsearch.tools.wol.errors import NotInitializedError
from wolsearch.tools.wol.extractor import RESULT_SELECTOR
from wolsearch.tools.wol.models import SearchRequest
from wolsearch.tools.wol.service import WolSearchService


def _service(page: FakePage | None = None, **config_overrides) -> tuple[WolSearchService, FakeSession]:
    session = FakeSession(page)
    config = WolConfig(**config_overrides)
    return WolSearchService(session, config), session  # type: ignore[arg-type]


def test_build_search_url_is_deterministic_and_escaped() -> None:
    service, _ = _service()
    request = SearchRequest(query="faith & hope")

    url = service.build_search_url(request)

    assert url == service.build_search_url(request)
    assert url == (
        "https://wol.jw.org/en/wol/s/r1/lp-e?q=faith%20%26%20hope&p=par&r=occ&st=a"
    )
    query_string = urlsplit(url).query
    assert [key for key, _ in parse_qsl(query_string)] == ["q", "p", "r", "st"]
    assert dict(parse_qsl(query_string))["q"] == "faith & hope"


def test_build_search_url_uses_configured_endpoint() -> None:
    service, _ = _service(base_url="https://example.org", search_path="/s")
    request = SearchRequest(query="love", search_type="doc", sort_by="newest")

    assert service.build_search_url(request) == "https://example.org/s?q=love&p=doc&r=newest&st=a"


def test_new_request_uses_configured_codes() -> None:
    service, _ = _service(search_type="doc", sort_by="newest")

    request = service.new_request("love", 50)

    assert request.search_type == "doc"
    assert request.sort_by == "newest"
    assert request.max_results == 10


async def test_search_requires_initialize() -> None:
    service, session = _service()
    session.started = False

    with pytest.raises(NotInitializedError):
        await service.search(SearchRequest(query="love"))
    assert session.contexts == []


async def test_initialize_and_shutdown_delegate_to_session() -> None:
    service, session = _service()
    session.started = False

    async with service:
        assert service.is_initialized
    assert session.start_calls == 1
    assert session.close_calls == 1
    assert not service.is_initialized


async def test_search_success_flow() -> None:
    page = FakePage(
        nodes=[make_node(title=f"Title {i}") for i in range(7)],
        count_text="1651 results ( Located in the same paragraph ).",
    )
    service, session = _service(page, timeout_ms=12000)

    response = await service.search(SearchRequest(query="faith", max_results=5))

    assert response.success is True
    assert response.error == ""
    assert response.total_results == 1651
    assert len(response.results) == 5
    assert response.search_url.startswith("https://wol.jw.org/en/wol/s/r1/lp-e?q=faith")
    assert page.visited == [(response.search_url, 12000)]
    assert page.waited == [(RESULT_SELECTOR, 12000)]
    assert page.closed is True
    assert session.contexts[0].closed is True


async def test_search_count_failure_does_not_fail_request() -> None:
    page = FakePage(nodes=[make_node()], count_text="lots")
    service, _ = _service(page)

    response = await service.search(SearchRequest(query="faith"))

    assert response.success is True
    assert response.total_results == 0
    assert len(response.results) == 1


async def test_navigation_timeout_becomes_failed_response() -> None:
    page = FakePage(goto_error=PlaywrightTimeoutError("Timeout 30000ms exceeded."))
    service, session = _service(page)

    response = await service.search(SearchRequest(query="faith"))

    assert response.success is False
    assert response.results == []
    assert response.total_results == 0
    assert "did not load" in response.error
    assert page.waited == []
    assert page.closed is True
    assert session.contexts[0].closed is True


async def test_missing_results_container_becomes_failed_response() -> None:
    page = FakePage(wait_error=PlaywrightTimeoutError("Timeout 30000ms exceeded."))
    service, session = _service(page)

    response = await service.search(SearchRequest(query="zzzzqqq"))

    assert response.success is False
    assert response.results == []
    assert "no search results appeared" in response.error
    assert page.closed is True
    assert session.contexts[0].closed is True


async def test_browser_error_becomes_failed_response() -> None:
    page = FakePage(goto_error=PlaywrightError("net::ERR_NAME_NOT_RESOLVED"))
    service, _ = _service(page)

    response = await service.search(SearchRequest(query="faith"))

    assert response.success is False
    assert "ERR_NAME_NOT_RESOLVED" in response.error


async def test_unexpected_error_still_cleans_up() -> None:
    page = FakePage(goto_error=RuntimeError("boom"))
    service, session = _service(page)

    response = await service.search(SearchRequest(query="faith"))

    assert response.success is False
    assert response.error == "boom"
    assert page.closed is True
    assert session.contexts[0].closed is True


async def test_each_search_gets_its_own_context() -> None:
    service, session = _service(FakePage(nodes=[make_node()]))

    await service.search(SearchRequest(query="a"))
    await service.search(SearchRequest(query="b"))

    assert len(session.contexts) == 2
    assert all(context.closed for context in session.contexts)


async def test_cancellation_propagates_after_cleanup() -> None:
    page = FakePage(goto_error=asyncio.CancelledError())
    service, session = _service(page)

    with pytest.raises(asyncio.CancelledError):
        await service.search(SearchRequest(query="faith"))
    assert page.closed is True
    assert session.contexts[0].closed is True
