"""High-level orchestration for loading optimization requests."""

from __future__ import annotations

import logging
import time
from dataclasses import asdict
from datetime import datetime, timezone
from typing import Optional, Sequence

from ...models.domain import Booking, Branch, LoadGroup, OptimizationRun, Vehicle
from ...schemas.loading import (
    ApplyRequest,
    ApplyResponse,
    BookingModel,
    GroupMetrics,
    LoadGroupModel,
    OptimizeRequest,
    OptimizeResponse,
    SelectedGroupModel,
    StatisticsModel,
    VehicleModel,
)
from ..outputs.formatter import run_to_csv
from .dispatcher import get_allocator
from .statistics import build_optimization_log, compute_statistics

logger = logging.getLogger(__name__)


def optimize(
    bookings: Sequence[Booking],
    vehicles: Sequence[Vehicle],
    strategy: str,
    *,
    reference_time: Optional[datetime] = None,
) -> OptimizationRun:
    """Split ``bookings`` into load groups over ``vehicles`` using ``strategy``.

    Raises ValueError for an unknown strategy. Constraint violations never
    raise; they are reported as group warnings.
    """

    allocator = get_allocator(strategy, reference_time=reference_time)
    created_at = datetime.now(timezone.utc)
    if not bookings:
        return OptimizationRun(
            strategy=strategy,
            groups=[],
            statistics=compute_statistics([]),
            created_at=created_at,
        )

    started = time.perf_counter()
    groups = allocator.allocate(bookings=list(bookings), vehicles=list(vehicles))
    elapsed_ms = int((time.perf_counter() - started) * 1000)

    statistics = compute_statistics(groups)
    logger.info(
        "Optimized %d bookings over %d vehicles with '%s': %d groups, %d warnings in %d ms",
        len(bookings),
        len(vehicles),
        strategy,
        len(groups),
        statistics.total_warnings,
        elapsed_ms,
    )
    return OptimizationRun(
        strategy=strategy,
        groups=groups,
        statistics=statistics,
        execution_time_ms=elapsed_ms,
        created_at=created_at,
    )


def select_groups(run: OptimizationRun, group_ids: Sequence[str]) -> list[LoadGroup]:
    """Return the groups of ``run`` chosen by the dispatcher, in run order."""

    known = {group.group_id for group in run.groups}
    missing = [group_id for group_id in group_ids if group_id not in known]
    if missing:
        raise ValueError(f"Unknown group ids: {', '.join(missing)}")
    wanted = set(group_ids)
    return [group for group in run.groups if group.group_id in wanted]


def _to_booking(model: BookingModel) -> Booking:
    return Booking(
        booking_id=model.booking_id,
        lr_number=model.lr_number,
        from_branch=Branch(name=model.from_branch.name, city=model.from_branch.city),
        to_branch=Branch(name=model.to_branch.name, city=model.to_branch.city),
        actual_weight=model.actual_weight,
        total_amount=model.total_amount,
        priority=model.priority,
        fragile=model.fragile,
        created_at=model.created_at,
    )


def _to_vehicle(model: VehicleModel) -> Vehicle:
    return Vehicle(
        vehicle_id=model.vehicle_id,
        registration=model.registration,
        max_weight=model.max_weight,
        max_capacity=model.max_capacity,
    )


def _booking_model(booking: Booking) -> BookingModel:
    return BookingModel.model_validate(asdict(booking))


def _vehicle_model(vehicle: Optional[Vehicle]) -> Optional[VehicleModel]:
    return VehicleModel.model_validate(asdict(vehicle)) if vehicle is not None else None


def group_to_model(group: LoadGroup) -> LoadGroupModel:
    return LoadGroupModel(
        group_id=group.group_id,
        vehicle=_vehicle_model(group.vehicle),
        bookings=[_booking_model(booking) for booking in group.bookings],
        route=group.route,
        total_weight=group.total_weight,
        total_value=group.total_value,
        utilization=group.utilization,
        efficiency=group.efficiency,
        warnings=list(group.warnings),
        notes=list(group.notes),
        is_overflow=group.is_overflow,
    )


def _run_request(payload: OptimizeRequest) -> OptimizationRun:
    bookings = [_to_booking(model) for model in payload.bookings]
    vehicles = [_to_vehicle(model) for model in payload.vehicles]
    return optimize(bookings, vehicles, payload.strategy, reference_time=payload.reference_time)


def run_to_response(run: OptimizationRun) -> OptimizeResponse:
    return OptimizeResponse(
        strategy=run.strategy,
        groups=[group_to_model(group) for group in run.groups],
        statistics=StatisticsModel.model_validate(asdict(run.statistics)),
        log=build_optimization_log(run),
    )


def process_optimization_request(payload: OptimizeRequest) -> OptimizeResponse:
    return run_to_response(_run_request(payload))


def process_apply_request(payload: ApplyRequest) -> ApplyResponse:
    """Re-run the optimization for the submitted inputs and keep the chosen groups."""

    run = _run_request(payload)
    chosen = select_groups(run, payload.selected_group_ids)
    logger.info("Applying %d of %d '%s' groups", len(chosen), len(run.groups), run.strategy)
    return ApplyResponse(
        strategy=run.strategy,
        groups=[
            SelectedGroupModel(
                group_id=group.group_id,
                vehicle=_vehicle_model(group.vehicle),
                bookings=[_booking_model(booking) for booking in group.bookings],
                route=group.route,
                metrics=GroupMetrics(
                    total_weight=group.total_weight,
                    total_value=group.total_value,
                    utilization=group.utilization,
                    efficiency=group.efficiency,
                ),
                warnings=list(group.warnings),
            )
            for group in chosen
        ],
    )


def process_manifest_request(payload: OptimizeRequest) -> str:
    return run_to_csv(_run_request(payload))
