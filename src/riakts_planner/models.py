"""Data models for riakts_planner."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from typing import Any, Iterable, Mapping, Tuple, Union
import pandas as pd

from .exceptions import InvalidGroupByDurationError, InvalidTagSetError, InvalidTimeRangeError

TimestampLike = Union[pd.Timestamp, datetime, str, int]
DurationLike = Union[pd.Timedelta, timedelta, str, int, None]
TagSets = Tuple[Tuple[str, ...], ...]


def to_timestamp(value: TimestampLike) -> pd.Timestamp:
    """Coerce to a tz-aware timestamp; naive values are taken as UTC."""
    ts = pd.Timestamp(value)
    if ts.tzinfo is None:
        return ts.tz_localize("UTC")
    return ts


def to_timedelta(value: DurationLike) -> pd.Timedelta:
    if value is None or (isinstance(value, str) and not value.strip()):
        return pd.Timedelta(0)
    return pd.Timedelta(value)


def parse_tag_constraint(constraint: str) -> Tuple[str, str]:
    """Split a ``key=value`` constraint into its parts."""
    key, sep, value = constraint.partition("=")
    if not sep or not key:
        raise InvalidTagSetError(f"Tag constraint must be key=value, got {constraint!r}")
    return key, value


@dataclass(frozen=True, order=True)
class TimeInterval:
    """Half-open time window ``[start, end)`` with UTC bounds."""

    start: pd.Timestamp
    end: pd.Timestamp

    def __post_init__(self) -> None:
        start = to_timestamp(self.start).tz_convert("UTC")
        end = to_timestamp(self.end).tz_convert("UTC")
        if end < start:
            raise InvalidTimeRangeError(f"Interval end {end} is before start {start}")
        object.__setattr__(self, "start", start)
        object.__setattr__(self, "end", end)

    @property
    def start_nanos(self) -> int:
        return int(self.start.value)

    @property
    def end_nanos(self) -> int:
        return int(self.end.value)

    @property
    def duration(self) -> pd.Timedelta:
        return self.end - self.start

    def overlaps(self, other: "TimeInterval") -> bool:
        return self.start < other.end and other.start < self.end

    def clamp(self, outer: "TimeInterval") -> "TimeInterval":
        """Return this interval with its bounds limited to ``outer``."""
        return TimeInterval(max(self.start, outer.start), min(self.end, outer.end))

    def __str__(self) -> str:
        return f"[{self.start.isoformat()}, {self.end.isoformat()})"


def _normalize_tag_sets(tag_sets: Any) -> TagSets:
    if not tag_sets:
        return ()
    if isinstance(tag_sets, (Mapping, str)):
        tag_sets = [tag_sets]
    normalized = []
    for tag_set in tag_sets:
        if isinstance(tag_set, Mapping):
            constraints = tuple(f"{k}={v}" for k, v in tag_set.items())
        elif isinstance(tag_set, str):
            constraints = (tag_set,)
        else:
            constraints = tuple(str(t) for t in tag_set)
        for constraint in constraints:
            parse_tag_constraint(constraint)
        normalized.append(constraints)
    return tuple(normalized)


@dataclass(frozen=True)
class AnalyticsQuery:
    """Abstract analytics request to be turned into a query plan.

    ``tag_sets`` are OR'ed together; the ``key=value`` constraints inside a
    single tag-set are AND'ed. An empty ``aggregation`` requests raw values.
    """

    measurement: str
    field: str
    time_start: pd.Timestamp
    time_end: pd.Timestamp
    aggregation: str = ""
    group_by_duration: pd.Timedelta = pd.Timedelta(0)
    tag_sets: TagSets = ()
    query_id: int = 0
    human_label: str = ""
    human_description: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "time_start", to_timestamp(self.time_start))
        object.__setattr__(self, "time_end", to_timestamp(self.time_end))
        object.__setattr__(self, "group_by_duration", to_timedelta(self.group_by_duration))
        object.__setattr__(self, "tag_sets", _normalize_tag_sets(self.tag_sets))
        object.__setattr__(self, "aggregation", self.aggregation or "")

    def validate(self) -> None:
        if self.time_end < self.time_start:
            raise InvalidTimeRangeError(
                f"TimeEnd {self.time_end} is before TimeStart {self.time_start}"
            )
        if self.group_by_duration < pd.Timedelta(0):
            raise InvalidGroupByDurationError(
                f"GroupByDuration must not be negative, got {self.group_by_duration}"
            )

    @property
    def interval(self) -> TimeInterval:
        return TimeInterval(self.time_start, self.time_end)

    def force_utc(self) -> "AnalyticsQuery":
        """Return a copy with timestamps rewritten in UTC, for pretty-printing."""
        return replace(
            self,
            time_start=self.time_start.tz_convert("UTC"),
            time_end=self.time_end.tz_convert("UTC"),
        )

    def __str__(self) -> str:
        tag_sets = [list(tag_set) for tag_set in self.tag_sets]
        return (
            f"ID: {self.query_id}, HumanLabel: {self.human_label}, "
            f"HumanDescription: {self.human_description}, "
            f"MeasurementName: {self.measurement}, FieldName: {self.field}, "
            f"AggregationType: {self.aggregation}, TimeStart: {self.time_start}, "
            f"TimeEnd: {self.time_end}, GroupByDuration: {self.group_by_duration}, "
            f"TagSets: {tag_sets}"
        )


def _dict_get(d: Mapping[str, Any], keys: Iterable[str], fallback: Any = None) -> Any:
    for key in keys:
        if key in d:
            return d[key]
    return fallback


def resolve_query(query: AnalyticsQuery | Mapping[str, Any]) -> AnalyticsQuery:
    """Build an AnalyticsQuery from a plain mapping (e.g. a decoded JSON line)."""
    if isinstance(query, AnalyticsQuery):
        return query
    measurement = _dict_get(query, ("measurement", "measurement_name"))
    field_name = _dict_get(query, ("field", "field_name"))
    start = _dict_get(query, ("time_start", "start"))
    end = _dict_get(query, ("time_end", "end"))
    if not measurement or not field_name:
        raise ValueError("measurement and field are required in each query")
    if start is None or end is None:
        raise ValueError("time_start and time_end are required in each query")
    return AnalyticsQuery(
        measurement=str(measurement),
        field=str(field_name),
        time_start=start,
        time_end=end,
        aggregation=str(_dict_get(query, ("aggregation", "aggregation_type"), "") or ""),
        group_by_duration=_dict_get(query, ("group_by_duration", "group_by"), None),
        tag_sets=_dict_get(query, ("tag_sets", "tags"), ()),
        query_id=int(_dict_get(query, ("query_id", "id"), 0) or 0),
        human_label=str(_dict_get(query, ("human_label",), "") or ""),
        human_description=str(_dict_get(query, ("human_description",), "") or ""),
    )
