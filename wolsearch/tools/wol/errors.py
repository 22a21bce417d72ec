"""Errors raised by the WOL search tool."""


class WolSearchError(Exception):
    """Base class for WOL search failures."""


class EngineInitError(WolSearchError):
    """Raised when the headless browser cannot be started."""


class NotInitializedError(WolSearchError):
    """Raised when a search is attempted before the engine was started."""


class NavigationTimeoutError(WolSearchError):
    """Raised when the results page does not load within the timeout."""


class ResultsNotFoundError(WolSearchError):
    """Raised when the results container never appears on the page."""


class PerResultExtractionError(WolSearchError):
    """Raised when a single result node cannot be read."""

    def __init__(self, index: int, cause: Exception):
        super().__init__(f"result #{index}: {cause}")
        self.index = index
        self.cause = cause


class CountParseError(WolSearchError):
    """Raised when the total results indicator cannot be parsed."""
