"""Download the Chromium build the search engine launches."""

from __future__ import annotations

import asyncio
import sys

DEFAULT_INSTALL_TIMEOUT_S = 10 * 60
MAX_OUTPUT_CHARS = 4000

INSTALL_HINT = "run `wolsearch install-browser` to download Chromium"

_MISSING_BROWSER_MARKERS = (
    "executable doesn't exist",
    "please run the following command",
    "browser has not been found",
)


def is_missing_browser_error(exc: BaseException) -> bool:
    """True when a launch failed because Chromium was never downloaded."""
    text = str(exc).lower()
    return any(marker in text for marker in _MISSING_BROWSER_MARKERS)


async def install_chromium(timeout_s: float = DEFAULT_INSTALL_TIMEOUT_S) -> tuple[bool, str]:
    """Run `python -m playwright install chromium` for the pinned Playwright.

    Returns whether it succeeded and the command output for the terminal.
    """
    process = await asyncio.create_subprocess_exec(
        sys.executable,
        "-m",
        "playwright",
        "install",
        "chromium",
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.STDOUT,
    )
    try:
        output, _ = await asyncio.wait_for(process.communicate(), timeout=timeout_s)
    except asyncio.TimeoutError:
        process.kill()
        return False, f"Chromium download timed out after {timeout_s:g}s"

    text = output.decode("utf-8", errors="replace").strip()
    if len(text) > MAX_OUTPUT_CHARS:
        text = "...\n" + text[-MAX_OUTPUT_CHARS:]

    if process.returncode == 0:
        return True, text or "Chromium installed"
    return False, text or f"playwright install exited with code {process.returncode}"
