"""Owned Playwright engine handle shared by all searches."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any

from loguru import logger

from wolsearch.tools.wol.errors import EngineInitError, NotInitializedError
from wolsearch.tools.wol.installer import INSTALL_HINT, is_missing_browser_error

if TYPE_CHECKING:
    from wolsearch.config.schema import WolConfig

LAUNCH_ARGS = (
    "--disable-http2",
    "--disable-blink-features=AutomationControlled",
    "--no-first-run",
    "--disable-dev-shm-usage",
    "--no-sandbox",
    "--disable-logging",
    "--disable-web-security",
    "--silent",
)


class EngineSession:
    """Chromium browser launched once and closed once.

    Searches never share a browsing context: each one asks for a fresh
    context through ``new_context`` and closes it when done. Only the
    browser handle itself is shared.
    """

    def __init__(self, config: WolConfig | None = None):
        from wolsearch.config.schema import WolConfig

        self.config = config or WolConfig()
        self._playwright: Any = None
        self._browser: Any = None
        self._start_lock = asyncio.Lock()

    @property
    def is_started(self) -> bool:
        return self._browser is not None

    @property
    def launch_args(self) -> list[str]:
        return [*LAUNCH_ARGS, *self.config.extra_launch_args]

    async def start(self) -> None:
        """Launch the browser. Safe to call more than once."""
        async with self._start_lock:
            if self._browser is not None:
                return

            from playwright.async_api import async_playwright

            try:
                self._playwright = await async_playwright().start()
                self._browser = await self._playwright.chromium.launch(
                    headless=self.config.headless,
                    args=self.launch_args,
                )
            except Exception as e:
                logger.error("Failed to start browser engine: {}", e)
                await self._stop_driver()
                message = f"browser engine failed to start: {e}"
                if is_missing_browser_error(e):
                    message = f"{message} ({INSTALL_HINT})"
                raise EngineInitError(message) from e

        logger.debug("Browser engine started (headless={})", self.config.headless)

    async def new_context(self) -> Any:
        """Open an isolated browsing context with the configured identity."""
        if self._browser is None:
            raise NotInitializedError("browser engine not started; call initialize() first")
        return await self._browser.new_context(
            user_agent=self.config.user_agent,
            viewport={
                "width": self.config.viewport_width,
                "height": self.config.viewport_height,
            },
        )

    async def close(self, timeout_s: float | None = None) -> None:
        """Close the browser and stop the driver. Never raises."""
        timeout = timeout_s if timeout_s is not None else self.config.close_timeout_s
        browser, self._browser = self._browser, None
        if browser is not None:
            try:
                await asyncio.wait_for(browser.close(), timeout=timeout)
            except asyncio.TimeoutError:
                logger.warning("Browser did not close within {}s", timeout)
            except Exception as e:
                logger.warning("Error closing browser: {}", e)
        await self._stop_driver()

    async def _stop_driver(self) -> None:
        playwright, self._playwright = self._playwright, None
        self._browser = None
        if playwright is None:
            return
        try:
            await playwright.stop()
        except Exception as e:
            logger.warning("Error stopping Playwright driver: {}", e)
