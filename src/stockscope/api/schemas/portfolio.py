"""Pydantic schemas for portfolio endpoints."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel

from stockscope.domain.models import Holding
from stockscope.domain.views import HoldingValuation, MutationResult


class HoldingCreateRequest(BaseModel):
    """Request schema for adding a holding."""

    symbol: str
    shares: Decimal
    avg_price: Decimal


class HoldingAtMarketRequest(BaseModel):
    """Request schema for adding a holding at the current quote price."""

    symbol: str
    shares: Decimal


class HoldingUpdateRequest(BaseModel):
    """Request schema for editing a holding."""

    shares: Decimal
    avg_price: Decimal


class HoldingResponse(BaseModel):
    """Response schema for a holding."""

    holding_id: str
    symbol: str
    shares: Decimal
    avg_price: Decimal
    date_added: Optional[datetime] = None

    @classmethod
    def from_domain(cls, holding: Holding) -> "HoldingResponse":
        return cls(
            holding_id=holding.holding_id,
            symbol=holding.symbol,
            shares=holding.shares,
            avg_price=holding.avg_price,
            date_added=holding.date_added,
        )


class HoldingMutationResponse(BaseModel):
    """A changed holding plus the persistence outcome."""

    holding: HoldingResponse
    saved: bool
    save_error: Optional[str] = None

    @classmethod
    def from_result(cls, result: MutationResult) -> "HoldingMutationResponse":
        return cls(
            holding=HoldingResponse.from_domain(result.value),
            saved=result.saved.ok,
            save_error=result.saved.error,
        )


class HoldingValuationResponse(BaseModel):
    """A holding valued at the current price (price fields null when unpriced)."""

    holding: HoldingResponse
    current_price: Optional[Decimal] = None
    current_value: Optional[Decimal] = None
    gain_loss: Optional[Decimal] = None
    gain_loss_percent: Optional[Decimal] = None

    @classmethod
    def from_view(cls, view: HoldingValuation) -> "HoldingValuationResponse":
        cent = Decimal("0.01")
        return cls(
            holding=HoldingResponse.from_domain(view.holding),
            current_price=view.current_price,
            current_value=view.current_value.quantize(cent) if view.is_priced else None,
            gain_loss=view.gain_loss.quantize(cent) if view.is_priced else None,
            gain_loss_percent=view.gain_loss_percent.quantize(cent) if view.is_priced else None,
        )


class PortfolioResponse(BaseModel):
    """Response schema for the portfolio summary."""

    holdings: list[HoldingValuationResponse]
    total_value: Decimal
    total_cost: Decimal
    total_gain_loss: Decimal
    holding_count: int
    as_of: Optional[datetime] = None
