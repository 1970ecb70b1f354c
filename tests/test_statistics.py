from datetime import datetime, timedelta, timezone

import pytest

from src.loadopt.models.domain import Booking, Branch, Vehicle
from src.loadopt.schemas.loading import OptimizationLogModel
from src.loadopt.services.loading.groups import build_group
from src.loadopt.services.loading.service import optimize
from src.loadopt.services.loading.statistics import (
    build_optimization_log,
    compute_statistics,
    summarize_optimization_logs,
)


def _booking(bid: str, weight: float, amount: float, to_city: str = "Pune") -> Booking:
    return Booking(
        booking_id=bid,
        from_branch=Branch(city="Mumbai"),
        to_branch=Branch(city=to_city),
        actual_weight=weight,
        total_amount=amount,
    )


def test_compute_statistics_for_empty_groups():
    stats = compute_statistics([])

    assert stats.total_bookings == 0
    assert stats.average_efficiency == 0
    assert stats.average_bookings_per_vehicle == 0


def test_compute_statistics_aggregates_groups():
    truck = Vehicle("V1", max_weight=1000, max_capacity=10)
    van = Vehicle("V2", max_weight=500)
    groups = [
        build_group("g-0", [_booking("B1", 400, 1000), _booking("B2", 200, 500, "Nashik")], truck),
        build_group("g-1", [_booking("B3", 600, 2500)], van),
    ]

    stats = compute_statistics(groups)

    assert stats.total_bookings == 3
    assert stats.total_weight == 1200
    assert stats.total_value == 4000
    assert stats.vehicles_used == 2
    assert stats.unique_routes == 2
    assert stats.average_bookings_per_vehicle == pytest.approx(1.5)
    assert stats.total_warnings == 1
    assert stats.average_utilization == pytest.approx((60 + 100) / 2)
    assert stats.total_groups == 2
    assert stats.overflow_groups == 0


def test_build_optimization_log_from_run():
    vehicle = Vehicle("V1", max_weight=1000, max_capacity=50)
    run = optimize(
        [_booking("B1", 400, 100), _booking("B2", 300, 200), _booking("B3", 250, 300)],
        [vehicle],
        "capacity",
    )

    log = build_optimization_log(run)

    assert log.optimization_type == "capacity"
    assert log.total_bookings == 3
    assert log.total_weight == 950
    assert log.total_value == 600
    assert log.vehicles_used == 1
    assert log.avg_utilization == pytest.approx(95.0)
    assert log.execution_time_ms >= 0


def test_summarize_optimization_logs_filters_by_date():
    logs = [
        OptimizationLogModel(
            optimization_type="route",
            total_bookings=10,
            total_weight=800,
            total_value=5000,
            vehicles_used=2,
            avg_utilization=40,
            avg_efficiency=70,
            execution_time_ms=12,
            created_at=datetime(2024, 5, 1),
        ),
        OptimizationLogModel(
            optimization_type="multi_factor",
            total_bookings=20,
            total_weight=1600,
            total_value=9000,
            vehicles_used=3,
            avg_utilization=80,
            avg_efficiency=90,
            execution_time_ms=30,
            created_at=datetime(2024, 5, 20),
        ),
        OptimizationLogModel(
            optimization_type="route",
            total_bookings=4,
            total_weight=100,
            total_value=300,
            vehicles_used=1,
            avg_utilization=10,
            avg_efficiency=50,
            execution_time_ms=2,
            created_at=datetime(2024, 5, 25),
        ),
    ]

    everything = summarize_optimization_logs(logs)
    assert everything.total_optimizations == 3
    assert everything.optimizations_by_type == {"route": 2, "multi_factor": 1}
    assert everything.total_bookings_optimized == 34

    recent = summarize_optimization_logs(logs, since=datetime(2024, 5, 15))
    assert recent.total_optimizations == 2
    assert recent.avg_efficiency == pytest.approx(70)
    assert recent.avg_utilization == pytest.approx(45)
    assert recent.avg_execution_time_ms == pytest.approx(16)
    assert recent.total_weight_optimized == 1700


def test_summarize_optimization_logs_without_logs():
    summary = summarize_optimization_logs([])

    assert summary.total_optimizations == 0
    assert summary.avg_efficiency == 0
    assert summary.optimizations_by_type == {}


def test_service_log_is_stamped_and_kept_by_date_filter():
    before = datetime.now(timezone.utc)
    run = optimize(
        [Booking("B1", Branch(city="Mumbai"), Branch(city="Pune"), actual_weight=200)],
        [Vehicle("V1", max_weight=1000)],
        "route",
    )

    log = build_optimization_log(run)

    assert log.created_at is not None
    assert log.created_at >= before
    kept = summarize_optimization_logs([log], since=datetime(2000, 1, 1))
    assert kept.total_optimizations == 1
    assert kept.total_bookings_optimized == 1
    dropped = summarize_optimization_logs([log], since=log.created_at + timedelta(minutes=1))
    assert dropped.total_optimizations == 0


def test_date_filter_compares_offset_cutoff_in_utc():
    log = OptimizationLogModel(
        optimization_type="weight",
        total_bookings=1,
        total_weight=10,
        total_value=0,
        vehicles_used=1,
        avg_utilization=1,
        avg_efficiency=60,
        execution_time_ms=0,
        created_at=datetime(2024, 5, 10, 7, 0),
    )
    ist = timezone(timedelta(hours=5, minutes=30))

    assert summarize_optimization_logs([log], since=datetime(2024, 5, 10, 12, 0, tzinfo=ist)).total_optimizations == 1
    assert summarize_optimization_logs([log], since=datetime(2024, 5, 10, 13, 0, tzinfo=ist)).total_optimizations == 0
