"""StockScope - local-first portfolio, watchlist and price-alert tracker."""

__version__ = "0.1.0"
