"""Exceptions for riakts_planner."""

class PlannerError(Exception):
    """Base exception for riakts_planner."""


class InvalidTimeRangeError(PlannerError):
    """Time range ends before it starts."""


class InvalidGroupByDurationError(PlannerError):
    """Grouping duration is negative."""


class InvalidTagSetError(PlannerError):
    """A tag constraint is not of the form key=value."""


class InvalidPlanError(PlannerError):
    """Raised when a query plan is built from malformed buckets or queries."""
