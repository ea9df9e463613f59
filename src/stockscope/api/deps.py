"""Dependency injection for FastAPI."""

from fastapi import Depends, Request

from stockscope.app_context import AppContext
from stockscope.services import (
    AlertScheduler,
    AnalysisService,
    PersistenceService,
    StockTracker,
)
from stockscope.services.domain_store import DomainStore


def get_context(request: Request) -> AppContext:
    """Provide the process AppContext created in the lifespan handler."""
    return request.app.state.context


def get_store(context: AppContext = Depends(get_context)) -> DomainStore:
    """Provide the DomainStore (read-only use in routers)."""
    return context.store


def get_tracker(context: AppContext = Depends(get_context)) -> StockTracker:
    """Provide StockTracker instance."""
    return context.tracker


def get_analysis_service(context: AppContext = Depends(get_context)) -> AnalysisService:
    """Provide AnalysisService instance."""
    return context.analysis


def get_persistence_service(context: AppContext = Depends(get_context)) -> PersistenceService:
    """Provide PersistenceService instance."""
    return context.persistence


def get_alert_scheduler(context: AppContext = Depends(get_context)) -> AlertScheduler:
    """Provide AlertScheduler instance."""
    return context.scheduler
