"""Route consolidation allocator."""

from __future__ import annotations

from typing import Sequence

from ...models.domain import Booking, LoadGroup, Vehicle
from .base import Allocator
from .groups import build_group, find_best_vehicle, total_weight


class RouteAllocator(Allocator):
    """One group per origin/destination city pair, on the first vehicle that fits it."""

    name = "route"

    def allocate(
        self,
        *,
        bookings: Sequence[Booking],
        vehicles: Sequence[Vehicle],
    ) -> list[LoadGroup]:
        by_route: dict[str, list[Booking]] = {}
        for booking in bookings:
            by_route.setdefault(booking.route_key, []).append(booking)

        groups: list[LoadGroup] = []
        for index, members in enumerate(by_route.values()):
            vehicle = find_best_vehicle(vehicles, total_weight(members), len(members))
            groups.append(build_group(self.group_id(index), members, vehicle))
        return groups
