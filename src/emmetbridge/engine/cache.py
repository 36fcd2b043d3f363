"""Completion cache management."""

import logging
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)


class CompletionCache:
    """In-memory cache for per-syntax completion lists.

    Building a completion list walks every snippet of a syntax, so each list
    is built once and reused until invalidated. The cache is owned by the
    caller; snippet data is assumed not to change between invalidations.
    """

    def __init__(self):
        self._cache: dict[str, list[Any]] = {}

    def get(self, syntax: str) -> Optional[list[Any]]:
        """
        Retrieve the completions cached for a syntax.

        Args:
            syntax: Syntax id

        Returns:
            The cached list, or None if it was never built
        """
        return self._cache.get(syntax)

    def get_or_build(self, syntax: str, builder: Callable[[str], list[Any]]) -> list[Any]:
        """
        Return cached completions, building them on first access.

        Args:
            syntax: Syntax id
            builder: Called with the syntax id when nothing is cached

        Returns:
            The completion list for the syntax
        """
        completions = self._cache.get(syntax)
        if completions is None:
            completions = builder(syntax)
            self._cache[syntax] = completions
            logger.debug(f"Built {len(completions)} completions for {syntax}")
        return completions

    def invalidate(self, syntax: Optional[str] = None) -> int:
        """
        Drop cached completions.

        Args:
            syntax: Syntax to drop, or None to drop everything

        Returns:
            Number of entries removed
        """
        if syntax is None:
            removed = len(self._cache)
            self._cache.clear()
            return removed
        if syntax in self._cache:
            del self._cache[syntax]
            return 1
        return 0

    def clear(self):
        """Clear the cache; call on teardown."""
        self._cache.clear()

    def size(self) -> int:
        """Get the number of cached syntaxes."""
        return len(self._cache)
