"""Portfolio API router."""

from fastapi import APIRouter, Depends

from stockscope.api.deps import get_analysis_service, get_tracker
from stockscope.api.schemas.portfolio import (
    HoldingAtMarketRequest,
    HoldingCreateRequest,
    HoldingMutationResponse,
    HoldingUpdateRequest,
    HoldingValuationResponse,
    PortfolioResponse,
)
from stockscope.services import AnalysisService, StockTracker

router = APIRouter(prefix="/portfolio", tags=["portfolio"])


@router.get("", response_model=PortfolioResponse)
async def get_portfolio(
    analysis: AnalysisService = Depends(get_analysis_service),
):
    """Holdings valued at current prices with portfolio totals."""
    view = await analysis.portfolio_view()
    return PortfolioResponse(
        holdings=[HoldingValuationResponse.from_view(v) for v in view.holdings],
        total_value=view.total_value,
        total_cost=view.total_cost,
        total_gain_loss=view.total_gain_loss,
        holding_count=view.holding_count,
        as_of=view.as_of,
    )


@router.post("/holdings", response_model=HoldingMutationResponse, status_code=201)
async def add_holding(
    data: HoldingCreateRequest,
    tracker: StockTracker = Depends(get_tracker),
):
    """Add a holding bought at the given average price."""
    result = await tracker.add_holding(data.symbol, data.shares, data.avg_price)
    return HoldingMutationResponse.from_result(result)


@router.post("/holdings/at-market", response_model=HoldingMutationResponse, status_code=201)
async def add_holding_at_market(
    data: HoldingAtMarketRequest,
    tracker: StockTracker = Depends(get_tracker),
):
    """Add a holding priced at the current quote."""
    result = await tracker.add_holding_at_market(data.symbol, data.shares)
    return HoldingMutationResponse.from_result(result)


@router.put("/holdings/{holding_id}", response_model=HoldingMutationResponse)
async def edit_holding(
    holding_id: str,
    data: HoldingUpdateRequest,
    tracker: StockTracker = Depends(get_tracker),
):
    """Replace a holding's share count and average price."""
    result = await tracker.edit_holding(holding_id, data.shares, data.avg_price)
    return HoldingMutationResponse.from_result(result)


@router.delete("/holdings/{holding_id}", response_model=HoldingMutationResponse)
async def remove_holding(
    holding_id: str,
    tracker: StockTracker = Depends(get_tracker),
):
    """Remove a holding."""
    result = await tracker.remove_holding(holding_id)
    return HoldingMutationResponse.from_result(result)
