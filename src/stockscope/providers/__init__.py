"""Market data providers module."""

from stockscope.providers.market_data_provider import PriceFeed
from stockscope.providers.stub_provider import StubPriceFeed

__all__ = [
    "PriceFeed",
    "StubPriceFeed",
]
