"""Run summaries and optimization log analytics."""

from __future__ import annotations

from collections import Counter
from datetime import datetime
from typing import Optional, Sequence

from ...models.domain import LoadGroup, OptimizationRun, Statistics
from ...schemas.loading import OptimizationAnalytics, OptimizationLogModel
from .scoring import as_utc


def compute_statistics(groups: Sequence[LoadGroup]) -> Statistics:
    if not groups:
        return Statistics()

    total_bookings = sum(group.item_count for group in groups)
    vehicle_ids = {group.vehicle.vehicle_id for group in groups if group.vehicle is not None}
    routes = {booking.route_key for group in groups for booking in group.bookings}
    vehicles_used = len(vehicle_ids)

    return Statistics(
        total_bookings=total_bookings,
        total_weight=sum(group.total_weight for group in groups),
        total_value=sum(group.total_value for group in groups),
        average_utilization=sum(group.utilization for group in groups) / len(groups),
        average_efficiency=sum(group.efficiency for group in groups) / len(groups),
        vehicles_used=vehicles_used,
        unique_routes=len(routes),
        average_bookings_per_vehicle=total_bookings / vehicles_used if vehicles_used else 0.0,
        total_warnings=sum(len(group.warnings) for group in groups),
        total_groups=len(groups),
        overflow_groups=sum(1 for group in groups if group.is_overflow),
    )


def build_optimization_log(run: OptimizationRun) -> OptimizationLogModel:
    stats = run.statistics
    return OptimizationLogModel(
        optimization_type=run.strategy,
        total_bookings=stats.total_bookings,
        total_weight=stats.total_weight,
        total_value=stats.total_value,
        vehicles_used=stats.vehicles_used,
        avg_utilization=round(stats.average_utilization, 2),
        avg_efficiency=round(stats.average_efficiency, 2),
        execution_time_ms=run.execution_time_ms,
        created_at=run.created_at,
    )


def _on_or_after(log: OptimizationLogModel, since: datetime) -> bool:
    if log.created_at is None:
        return False
    return as_utc(log.created_at) >= as_utc(since)


def summarize_optimization_logs(
    logs: Sequence[OptimizationLogModel],
    *,
    since: Optional[datetime] = None,
) -> OptimizationAnalytics:
    """Aggregate caller-supplied optimization logs, optionally from ``since`` onwards."""

    selected = [log for log in logs if since is None or _on_or_after(log, since)]
    count = len(selected)
    by_type = Counter(log.optimization_type for log in selected)

    def _average(values: list[float]) -> float:
        return sum(values) / count if count else 0.0

    return OptimizationAnalytics(
        total_optimizations=count,
        optimizations_by_type=dict(by_type),
        avg_efficiency=_average([log.avg_efficiency for log in selected]),
        avg_utilization=_average([log.avg_utilization for log in selected]),
        total_bookings_optimized=sum(log.total_bookings for log in selected),
        total_weight_optimized=sum(log.total_weight for log in selected),
        total_value_optimized=sum(log.total_value for log in selected),
        avg_execution_time_ms=_average([log.execution_time_ms for log in selected]),
    )
