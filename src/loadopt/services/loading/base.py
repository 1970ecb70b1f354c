"""Base classes for loading allocator implementations."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from ...models.domain import Booking, LoadGroup, Vehicle


class Allocator(ABC):
    """Contract for strategies that split bookings into load groups."""

    name: str = ""

    @abstractmethod
    def allocate(
        self,
        *,
        bookings: Sequence[Booking],
        vehicles: Sequence[Vehicle],
    ) -> list[LoadGroup]:
        raise NotImplementedError

    def group_id(self, index: int) -> str:
        return f"{self.name}-{index}"
