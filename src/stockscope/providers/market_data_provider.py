"""Price feed protocol."""

from typing import Protocol

from stockscope.domain.views import Quote


class PriceFeed(Protocol):
    """
    Protocol for quote sources.

    Implementations poll a source for one symbol at a time. The feed is
    not idempotent: consecutive calls may return different prices.
    """

    async def get_quote(self, symbol: str) -> Quote:
        """
        Fetch the current quote for a symbol.

        Raises FeedUnavailableError (or any exception, which callers wrap)
        when the quote cannot be obtained.
        """
        ...
