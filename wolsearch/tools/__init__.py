"""Tools exposed over the tool-invocation transport."""

from wolsearch.tools.base import Tool
from wolsearch.tools.registry import ToolRegistry

__all__ = ["Tool", "ToolRegistry"]
