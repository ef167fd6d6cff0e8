"""Time bucketing for group-by-time queries."""

from __future__ import annotations

from typing import List

import pandas as pd

from .exceptions import InvalidGroupByDurationError, InvalidTimeRangeError
from .models import DurationLike, TimeInterval, TimestampLike, to_timedelta, to_timestamp


def bucket_time_intervals(
    start: TimestampLike,
    end: TimestampLike,
    group_by: DurationLike,
) -> List[TimeInterval]:
    """Partition ``[start, end)`` into windows of width ``group_by``.

    Windows are aligned to multiples of ``group_by`` counted from the Unix
    epoch, matching InfluxDB's rounded group-by-time boundaries, so the first
    and last window may reach outside ``[start, end)``. They are returned
    unclamped. A zero ``group_by`` yields the whole range as one window.
    """
    start_ts = to_timestamp(start)
    end_ts = to_timestamp(end)
    window = to_timedelta(group_by)
    if end_ts < start_ts:
        raise InvalidTimeRangeError(f"End {end_ts} is before start {start_ts}")
    if window < pd.Timedelta(0):
        raise InvalidGroupByDurationError(f"Group-by duration must not be negative, got {window}")

    if window == pd.Timedelta(0):
        return [TimeInterval(start_ts, end_ts)]
    if start_ts == end_ts:
        return []

    step = int(window.value)
    end_ns = int(end_ts.value)
    cursor = int(start_ts.value)
    cursor -= cursor % step

    buckets = []
    while cursor < end_ns:
        buckets.append(
            TimeInterval(
                pd.Timestamp(cursor, tz="UTC"),
                pd.Timestamp(cursor + step, tz="UTC"),
            )
        )
        cursor += step
    return buckets
