"""Behavioral constants shared by the loading allocators."""

DEFAULT_MAX_CAPACITY = 50
DEFAULT_MAX_WEIGHT = 1000.0
BOOKINGS_PER_VEHICLE = 10
NEUTRAL_UTILIZATION = 50.0

WEIGHT_LIMIT_EXCEEDED = "Weight limit exceeded"
CAPACITY_LIMIT_EXCEEDED = "Capacity limit exceeded"
OVERFLOW_NOTE = "Overflow group - additional vehicle needed"
NO_VEHICLE_NOTE = "No vehicle assigned"

STRATEGIES = ("route", "weight", "value", "capacity", "multi_factor")
