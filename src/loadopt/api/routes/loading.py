"""Loading optimization endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status
from fastapi.responses import PlainTextResponse

from ...schemas.loading import (
    AnalyticsRequest,
    ApplyRequest,
    ApplyResponse,
    OptimizationAnalytics,
    OptimizeRequest,
    OptimizeResponse,
    StrategyInfo,
)
from ...services.loading.service import (
    process_apply_request,
    process_manifest_request,
    process_optimization_request,
)
from ...services.loading.statistics import summarize_optimization_logs

router = APIRouter(prefix="/loading", tags=["loading"])

STRATEGY_CATALOG = [
    StrategyInfo(value="route", label="Route Optimization", description="Group by destination routes"),
    StrategyInfo(value="weight", label="Weight Distribution", description="Balance weight across vehicles"),
    StrategyInfo(value="value", label="Value Optimization", description="Spread high-value shipments across trips"),
    StrategyInfo(value="capacity", label="Capacity Utilization", description="Maximize vehicle capacity usage"),
    StrategyInfo(
        value="multi_factor",
        label="Smart Loading",
        description="Score priority, size, value, age and route affinity per vehicle",
    ),
]


@router.get("/strategies", response_model=list[StrategyInfo])
def list_strategies() -> list[StrategyInfo]:
    return STRATEGY_CATALOG


@router.post("/optimize", response_model=OptimizeResponse, status_code=status.HTTP_200_OK)
def optimize_loading(payload: OptimizeRequest) -> OptimizeResponse:
    try:
        return process_optimization_request(payload)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error optimizing loading: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to optimize loading: {str(exc)}",
        ) from exc


@router.post("/optimize/csv", response_class=PlainTextResponse, status_code=status.HTTP_200_OK)
def export_manifest(payload: OptimizeRequest) -> PlainTextResponse:
    """Optimize and return the proposed loading manifest as CSV."""
    try:
        content = process_manifest_request(payload)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error exporting loading manifest: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to export loading manifest: {str(exc)}",
        ) from exc
    return PlainTextResponse(
        content,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="loading_{payload.strategy}.csv"'},
    )


@router.post("/apply", response_model=ApplyResponse, status_code=status.HTTP_200_OK)
def apply_groups(payload: ApplyRequest) -> ApplyResponse:
    """Return the selected groups ready to be turned into loading sessions by the caller."""
    try:
        return process_apply_request(payload)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@router.post("/analytics", response_model=OptimizationAnalytics, status_code=status.HTTP_200_OK)
def optimization_analytics(payload: AnalyticsRequest) -> OptimizationAnalytics:
    return summarize_optimization_logs(payload.logs, since=payload.since)
