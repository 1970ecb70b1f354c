"""Factory for loading allocators based on the selected strategy."""

from __future__ import annotations

from typing import Any

from .base import Allocator
from .capacity import CapacityAllocator
from .multi_factor import MultiFactorAllocator
from .route import RouteAllocator
from .value import ValueAllocator
from .weight import WeightAllocator


def get_allocator(strategy: str, **kwargs: Any) -> Allocator:
    match strategy:
        case "route":
            return RouteAllocator()
        case "weight":
            return WeightAllocator()
        case "value":
            return ValueAllocator()
        case "capacity":
            return CapacityAllocator()
        case "multi_factor":
            multi_kwargs = {k: v for k, v in kwargs.items() if k in {"reference_time"}}
            return MultiFactorAllocator(**multi_kwargs)
        case _:
            raise ValueError(f"Unknown loading strategy '{strategy}'.")

