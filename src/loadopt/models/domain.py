"""Domain models for bookings, vehicles and proposed load groups."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional


class Priority(str, Enum):
    NORMAL = "Normal"
    HIGH = "High"
    URGENT = "Urgent"


@dataclass(slots=True, frozen=True)
class Branch:
    """Origin or destination branch of a booking."""

    name: Optional[str] = None
    city: Optional[str] = None


@dataclass(slots=True, frozen=True)
class Booking:
    """A single shipment waiting to be loaded."""

    booking_id: str
    from_branch: Branch = field(default_factory=Branch)
    to_branch: Branch = field(default_factory=Branch)
    actual_weight: float = 0.0
    total_amount: float = 0.0
    priority: Priority = Priority.NORMAL
    fragile: bool = False
    created_at: Optional[datetime] = None
    lr_number: Optional[str] = None

    @property
    def route_key(self) -> str:
        from_city = self.from_branch.city or "Unknown"
        to_city = self.to_branch.city or "Unknown"
        return f"{from_city} → {to_city}"


@dataclass(slots=True, frozen=True)
class Vehicle:
    """A transport unit. A limit of ``None`` means the dimension is unconstrained."""

    vehicle_id: str
    registration: Optional[str] = None
    max_weight: Optional[float] = None
    max_capacity: Optional[int] = None


@dataclass(slots=True)
class LoadGroup:
    """Proposed assignment of a subset of bookings to one vehicle."""

    group_id: str
    vehicle: Optional[Vehicle]
    bookings: List[Booking]
    route: str
    total_weight: float
    total_value: float
    utilization: float
    efficiency: int
    warnings: List[str] = field(default_factory=list)
    notes: List[str] = field(default_factory=list)
    is_overflow: bool = False

    @property
    def item_count(self) -> int:
        return len(self.bookings)


@dataclass(slots=True)
class Statistics:
    total_bookings: int = 0
    total_weight: float = 0.0
    total_value: float = 0.0
    average_utilization: float = 0.0
    average_efficiency: float = 0.0
    vehicles_used: int = 0
    unique_routes: int = 0
    average_bookings_per_vehicle: float = 0.0
    total_warnings: int = 0
    total_groups: int = 0
    overflow_groups: int = 0


@dataclass(slots=True)
class OptimizationRun:
    """Ephemeral result of one optimizer invocation."""

    strategy: str
    groups: List[LoadGroup]
    statistics: Statistics
    execution_time_ms: int = 0
    created_at: Optional[datetime] = None
