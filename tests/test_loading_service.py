import csv
import io

import pytest

from src.loadopt.models.domain import Booking, Branch, Vehicle
from src.loadopt.schemas.loading import ApplyRequest, OptimizeRequest
from src.loadopt.services.loading import service as loading_service
from src.loadopt.services.outputs.formatter import run_to_csv


def _payload(strategy: str = "route") -> dict:
    return {
        "strategy": strategy,
        "bookings": [
            {
                "booking_id": "BK1",
                "lr_number": "LR-1001",
                "from_branch": {"name": "Andheri", "city": "Mumbai"},
                "to_branch": {"name": "Hadapsar", "city": "Pune"},
                "actual_weight": 400,
                "total_amount": 12000,
                "priority": "Urgent",
                "created_at": "2024-05-09T08:00:00",
            },
            {
                "booking_id": "BK2",
                "from_branch": {"city": "Mumbai"},
                "to_branch": {"city": "Nashik"},
                "actual_weight": 700,
                "total_amount": 3000,
                "created_at": "2024-05-10T08:00:00",
            },
            {
                "booking_id": "BK3",
                "from_branch": {"city": "Mumbai"},
                "to_branch": {"city": "Pune"},
                "actual_weight": None,
                "total_amount": None,
                "priority": "High",
            },
        ],
        "vehicles": [
            {"vehicle_id": "V1", "registration": "MH12AB1001", "max_weight": 500, "max_capacity": 10},
            {"vehicle_id": "V2", "registration": "MH12AB1002", "max_weight": 1000},
        ],
    }


def test_process_optimization_request_returns_groups_and_log():
    request = OptimizeRequest.model_validate(_payload("route"))

    response = loading_service.process_optimization_request(request)

    assert response.strategy == "route"
    assert [group.group_id for group in response.groups] == ["route-0", "route-1"]
    assert [b.booking_id for b in response.groups[0].bookings] == ["BK1", "BK3"]
    assert response.groups[0].vehicle.vehicle_id == "V1"
    assert response.groups[1].vehicle.vehicle_id == "V2"
    assert response.statistics.total_bookings == 3
    assert response.log.optimization_type == "route"

    payload = response.model_dump(mode="json")
    assert payload["groups"][0]["bookings"][0]["priority"] == "Urgent"


def test_missing_weight_and_value_are_treated_as_zero():
    request = OptimizeRequest.model_validate(_payload("weight"))

    response = loading_service.process_optimization_request(request)

    by_id = {b.booking_id: b for group in response.groups for b in group.bookings}
    assert by_id["BK3"].actual_weight == 0
    assert by_id["BK3"].total_amount == 0


def test_select_groups_keeps_run_order_and_rejects_unknown_ids():
    run = loading_service.optimize(
        [
            Booking("B1", Branch(city="Mumbai"), Branch(city="Pune"), actual_weight=10),
            Booking("B2", Branch(city="Mumbai"), Branch(city="Surat"), actual_weight=10),
        ],
        [Vehicle("V1")],
        "route",
    )

    chosen = loading_service.select_groups(run, ["route-1", "route-0"])
    assert [group.group_id for group in chosen] == ["route-0", "route-1"]

    with pytest.raises(ValueError, match="route-7"):
        loading_service.select_groups(run, ["route-7"])


def test_process_apply_request_returns_metrics():
    request = ApplyRequest.model_validate({**_payload("route"), "selected_group_ids": ["route-1"]})

    response = loading_service.process_apply_request(request)

    assert len(response.groups) == 1
    selected = response.groups[0]
    assert selected.route == "Mumbai → Nashik"
    assert selected.metrics.total_weight == 700
    assert selected.metrics.utilization == pytest.approx(70.0)


def test_run_to_csv_writes_one_row_per_booking():
    request = OptimizeRequest.model_validate(_payload("capacity"))
    content = loading_service.process_manifest_request(request)

    rows = list(csv.DictReader(io.StringIO(content)))
    assert sorted(row["booking_id"] for row in rows) == ["BK1", "BK2", "BK3"]
    assert {row["vehicle"] for row in rows} <= {"MH12AB1001", "MH12AB1002"}


def test_run_to_csv_marks_overflow_and_unassigned_rows():
    run = loading_service.optimize(
        [Booking("B1", Branch(city="Mumbai"), Branch(city="Pune"), actual_weight=10)],
        [],
        "capacity",
    )

    rows = list(csv.DictReader(io.StringIO(run_to_csv(run))))

    assert rows[0]["overflow"] == "yes"
    assert rows[0]["vehicle"] == ""
