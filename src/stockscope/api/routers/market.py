"""Market data API router."""

from fastapi import APIRouter, Depends, Query

from stockscope.api.deps import get_analysis_service
from stockscope.api.schemas.market import ComparisonResponse, QuoteResponse
from stockscope.services import AnalysisService

router = APIRouter(prefix="/market", tags=["market"])


@router.get("/quote/{symbol}", response_model=QuoteResponse)
async def get_quote(
    symbol: str,
    analysis: AnalysisService = Depends(get_analysis_service),
):
    """Current quote for a symbol."""
    quote = await analysis.lookup_quote(symbol)
    return QuoteResponse.from_view(quote)


@router.get("/compare", response_model=ComparisonResponse)
async def compare(
    left: str = Query(..., description="First symbol"),
    right: str = Query(..., description="Second symbol"),
    analysis: AnalysisService = Depends(get_analysis_service),
):
    """Compare two symbols; ties go to the left symbol."""
    view = await analysis.compare(left, right)
    return ComparisonResponse(
        left=QuoteResponse.from_view(view.left),
        right=QuoteResponse.from_view(view.right),
        price_winner=view.price_winner,
        change_percent_winner=view.change_percent_winner,
        volume_winner=view.volume_winner,
        market_cap_winner=view.market_cap_winner,
    )
