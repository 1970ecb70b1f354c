"""Utilities to serialize optimization runs into CSV manifests."""

from __future__ import annotations

import csv
import io

from ...models.domain import OptimizationRun

MANIFEST_FIELDS = [
    "group_id",
    "vehicle",
    "route",
    "booking_id",
    "lr_number",
    "actual_weight",
    "total_amount",
    "priority",
    "overflow",
    "warnings",
]


def run_to_csv(run: OptimizationRun) -> str:
    """One manifest row per booking, grouped in run order."""

    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=MANIFEST_FIELDS)
    writer.writeheader()
    for group in run.groups:
        vehicle = ""
        if group.vehicle is not None:
            vehicle = group.vehicle.registration or group.vehicle.vehicle_id
        for booking in group.bookings:
            writer.writerow(
                {
                    "group_id": group.group_id,
                    "vehicle": vehicle,
                    "route": booking.route_key,
                    "booking_id": booking.booking_id,
                    "lr_number": booking.lr_number or "",
                    "actual_weight": booking.actual_weight,
                    "total_amount": booking.total_amount,
                    "priority": booking.priority.value,
                    "overflow": "yes" if group.is_overflow else "",
                    "warnings": "; ".join(group.warnings),
                }
            )
    return buffer.getvalue()
