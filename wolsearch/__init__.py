"""
wolsearch - Watchtower Online Library search for AI assistants
"""

__version__ = "0.1.0"
__logo__ = "📚"
