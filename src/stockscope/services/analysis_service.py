"""Analysis service for portfolio and alert views."""

from decimal import Decimal

from stockscope.core.timezone import now_eastern
from stockscope.domain.views import AlertView, ComparisonView, PortfolioView, Quote
from stockscope.services import valuation_engine
from stockscope.services.domain_store import DomainStore
from stockscope.services.market_data_service import MarketDataService

_CENT = Decimal("0.01")


class AnalysisService:
    """
    Service for portfolio analytics.

    Reads the DomainStore, prices it through MarketDataService and derives
    metrics with the valuation engine. Never mutates the store.
    """

    def __init__(
        self,
        store: DomainStore,
        market_data_service: MarketDataService,
    ):
        self._store = store
        self._market = market_data_service

    async def portfolio_view(self) -> PortfolioView:
        """
        Value every holding at current prices.

        Holdings without a quote are listed unpriced and left out of the
        totals.
        """
        holdings = self._store.holdings
        if not holdings:
            return PortfolioView(as_of=now_eastern())

        quotes = await self._market.get_quotes([h.symbol for h in holdings])

        valuations = []
        total_cost = Decimal("0")
        total_gain_loss = Decimal("0")
        for holding in holdings:
            valuation = valuation_engine.value_holding(holding, quotes.get(holding.symbol))
            valuations.append(valuation)
            if valuation.is_priced:
                total_cost += holding.cost_basis
                total_gain_loss += valuation.gain_loss

        total_value = valuation_engine.portfolio_total(holdings, quotes)

        return PortfolioView(
            holdings=valuations,
            total_value=total_value.quantize(_CENT),
            total_cost=total_cost.quantize(_CENT),
            total_gain_loss=total_gain_loss.quantize(_CENT),
            holding_count=len(holdings),
            as_of=now_eastern(),
        )

    async def alerts_view(self) -> list[AlertView]:
        """Alerts with their current distance to target when priced."""
        alerts = self._store.alerts
        quotes = await self._market.get_quotes([a.symbol for a in alerts if a.is_pending])

        views = []
        for alert in alerts:
            quote = quotes.get(alert.symbol) if alert.is_pending else None
            if quote is None:
                views.append(AlertView(alert=alert))
                continue
            views.append(
                AlertView(
                    alert=alert,
                    current_price=quote.price,
                    percent_from_target=valuation_engine.percent_from_target(alert, quote).quantize(
                        _CENT
                    ),
                )
            )
        return views

    async def lookup_quote(self, symbol: str) -> Quote:
        """Current quote for one symbol; raises FeedUnavailableError."""
        return await self._market.get_quote(symbol)

    async def compare(self, left_symbol: str, right_symbol: str) -> ComparisonView:
        """Compare two symbols metric by metric; ties go to left_symbol."""
        left = await self._market.get_quote(left_symbol, use_cache=False)
        right = await self._market.get_quote(right_symbol, use_cache=False)
        return valuation_engine.compare(left, right)
