"""Pydantic request/response models for loading optimization endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from ..config import settings
from ..models.domain import Priority

StrategyName = Literal["route", "weight", "value", "capacity", "multi_factor"]


class BranchModel(BaseModel):
    name: Optional[str] = None
    city: Optional[str] = None


class BookingModel(BaseModel):
    booking_id: str
    lr_number: Optional[str] = Field(default=None, description="Consignment (LR) number shown on manifests.")
    from_branch: BranchModel = Field(default_factory=BranchModel)
    to_branch: BranchModel = Field(default_factory=BranchModel)
    actual_weight: float = Field(default=0.0, ge=0.0)
    total_amount: float = Field(default=0.0, ge=0.0, description="Declared value of the shipment.")
    priority: Priority = Priority.NORMAL
    fragile: bool = False
    created_at: Optional[datetime] = None

    @field_validator("actual_weight", "total_amount", mode="before")
    @classmethod
    def _missing_as_zero(cls, value: Optional[float]) -> float:
        return 0.0 if value is None else value


class VehicleModel(BaseModel):
    vehicle_id: str
    registration: Optional[str] = None
    max_weight: Optional[float] = Field(default=None, gt=0.0, description="Omit for no weight limit.")
    max_capacity: Optional[int] = Field(default=None, gt=0, description="Omit for no item-count limit.")


class OptimizeRequest(BaseModel):
    bookings: List[BookingModel] = Field(default_factory=list)
    vehicles: List[VehicleModel] = Field(default_factory=list)
    strategy: StrategyName = "route"
    reference_time: Optional[datetime] = Field(
        default=None,
        description="Clock used to age bookings (multi_factor). Defaults to the newest booking timestamp.",
    )

    @field_validator("bookings")
    @classmethod
    def validate_booking_count(cls, value: List[BookingModel]) -> List[BookingModel]:
        if len(value) > settings.max_bookings_per_request:
            raise ValueError(f"at most {settings.max_bookings_per_request} bookings per request")
        return value


class ApplyRequest(OptimizeRequest):
    selected_group_ids: List[str] = Field(..., min_length=1)


class LoadGroupModel(BaseModel):
    group_id: str
    vehicle: Optional[VehicleModel]
    bookings: List[BookingModel]
    route: str
    total_weight: float
    total_value: float
    utilization: float
    efficiency: int
    warnings: List[str]
    notes: List[str]
    is_overflow: bool


class StatisticsModel(BaseModel):
    total_bookings: int
    total_weight: float
    total_value: float
    average_utilization: float
    average_efficiency: float
    vehicles_used: int
    unique_routes: int
    average_bookings_per_vehicle: float
    total_warnings: int
    total_groups: int
    overflow_groups: int


class OptimizationLogModel(BaseModel):
    optimization_type: str
    total_bookings: int = Field(ge=0)
    total_weight: float = Field(ge=0.0)
    total_value: float = Field(ge=0.0)
    vehicles_used: int = Field(ge=0)
    avg_utilization: float = Field(ge=0.0, le=100.0)
    avg_efficiency: float = Field(ge=0.0, le=100.0)
    execution_time_ms: int = Field(ge=0)
    created_at: Optional[datetime] = None


class OptimizeResponse(BaseModel):
    strategy: StrategyName
    groups: List[LoadGroupModel]
    statistics: StatisticsModel
    log: OptimizationLogModel


class GroupMetrics(BaseModel):
    total_weight: float
    total_value: float
    utilization: float
    efficiency: int


class SelectedGroupModel(BaseModel):
    group_id: str
    vehicle: Optional[VehicleModel]
    bookings: List[BookingModel]
    route: str
    metrics: GroupMetrics
    warnings: List[str]


class ApplyResponse(BaseModel):
    strategy: StrategyName
    groups: List[SelectedGroupModel]


class AnalyticsRequest(BaseModel):
    logs: List[OptimizationLogModel] = Field(default_factory=list)
    since: Optional[datetime] = None


class OptimizationAnalytics(BaseModel):
    total_optimizations: int
    optimizations_by_type: Dict[str, int]
    avg_efficiency: float
    avg_utilization: float
    total_bookings_optimized: int
    total_weight_optimized: float
    total_value_optimized: float
    avg_execution_time_ms: float


class StrategyInfo(BaseModel):
    value: StrategyName
    label: str
    description: str
