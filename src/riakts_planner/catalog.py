"""Client-side catalog of known physical series.

The catalog indexes every series by ``(measurement, field)`` so planners can
narrow the candidate set before applying the finer tag and time tests.
"""

from __future__ import annotations

from dataclasses import dataclass, field as dataclass_field
from types import MappingProxyType
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Protocol, Sequence, Tuple
import logging
import pandas as pd

from .models import TagSets, TimeInterval, parse_tag_constraint

logger = logging.getLogger(__name__)

DEFAULT_TABLE = "usertable"
_RESERVED_COLUMNS = ("series_id", "table", "measurement", "field", "valid_start", "valid_end")


class SeriesLike(Protocol):
    """Capabilities a planner needs from one catalog series."""

    series_id: str
    table: str

    def matches_measurement_name(self, measurement: str) -> bool: ...

    def matches_field_name(self, field_name: str) -> bool: ...

    def matches_tag_sets(self, tag_sets: TagSets) -> bool: ...

    def matches_time_interval(self, interval: TimeInterval) -> bool: ...


class SeriesCatalogLike(Protocol):
    """Coarse lookup a planner needs from a catalog."""

    def series_for_measurement_and_field(self, measurement: str, field_name: str) -> Sequence[SeriesLike]: ...


@dataclass(frozen=True)
class Series:
    """One physical row: a measurement/field/tag combination with a validity window."""

    series_id: str
    measurement: str
    field: str
    valid: TimeInterval
    tags: Mapping[str, str] = dataclass_field(default_factory=dict, hash=False)
    table: str = DEFAULT_TABLE

    def __post_init__(self) -> None:
        object.__setattr__(self, "tags", MappingProxyType({str(k): str(v) for k, v in self.tags.items()}))

    def matches_measurement_name(self, measurement: str) -> bool:
        return self.measurement == measurement

    def matches_field_name(self, field_name: str) -> bool:
        return self.field == field_name

    def matches_tag_sets(self, tag_sets: TagSets) -> bool:
        """True if every constraint of at least one tag-set holds.

        An empty ``tag_sets`` places no constraint on tags.
        """
        if not tag_sets:
            return True
        for tag_set in tag_sets:
            if all(self.tags.get(k) == v for k, v in map(parse_tag_constraint, tag_set)):
                return True
        return False

    def matches_time_interval(self, interval: TimeInterval) -> bool:
        return self.valid.overlaps(interval)


class SeriesCatalog:
    """In-memory, read-only series index keyed by measurement and field."""

    def __init__(self, series: Iterable[Series] = ()) -> None:
        self._series: Tuple[Series, ...] = tuple(series)
        index: Dict[Tuple[str, str], List[Series]] = {}
        for s in self._series:
            index.setdefault((s.measurement, s.field), []).append(s)
        self._index = {key: tuple(values) for key, values in index.items()}
        logger.debug("Indexed %d series under %d measurement/field keys", len(self._series), len(self._index))

    def series_for_measurement_and_field(self, measurement: str, field_name: str) -> Tuple[Series, ...]:
        return self._index.get((measurement, field_name), ())

    def __len__(self) -> int:
        return len(self._series)

    def __iter__(self) -> Iterator[Series]:
        return iter(self._series)

    def __repr__(self) -> str:
        return f"SeriesCatalog({len(self._series)} series, {len(self._index)} keys)"

    @classmethod
    def from_records(
        cls,
        records: Iterable[Mapping[str, Any]],
        default_table: str = DEFAULT_TABLE,
    ) -> "SeriesCatalog":
        series = []
        for record in records:
            series_id = record.get("series_id", record.get("id"))
            if not series_id:
                raise ValueError("series_id is required in each catalog record")
            start = record.get("valid_start", record.get("start"))
            end = record.get("valid_end", record.get("end"))
            if start is None or end is None:
                raise ValueError(f"valid_start and valid_end are required for series {series_id!r}")
            series.append(
                Series(
                    series_id=str(series_id),
                    measurement=str(record["measurement"]),
                    field=str(record["field"]),
                    valid=TimeInterval(start, end),
                    tags=dict(record.get("tags") or {}),
                    table=str(record.get("table") or default_table),
                )
            )
        return cls(series)

    @classmethod
    def from_dataframe(
        cls,
        df: pd.DataFrame,
        default_table: str = DEFAULT_TABLE,
    ) -> "SeriesCatalog":
        """Build a catalog from a frame with one row per series.

        Columns other than the reserved ones are read as tags; missing tag
        values are skipped.
        """
        missing = [c for c in ("series_id", "measurement", "field", "valid_start", "valid_end") if c not in df.columns]
        if missing:
            raise ValueError(f"catalog dataframe is missing columns: {', '.join(missing)}")
        tag_columns = [c for c in df.columns if c not in _RESERVED_COLUMNS]
        records = []
        for row in df.to_dict(orient="records"):
            records.append(
                {
                    "series_id": row["series_id"],
                    "measurement": row["measurement"],
                    "field": row["field"],
                    "valid_start": row["valid_start"],
                    "valid_end": row["valid_end"],
                    "table": _optional_str(row.get("table")),
                    "tags": {c: row[c] for c in tag_columns if not pd.isna(row[c])},
                }
            )
        return cls.from_records(records, default_table=default_table)


def _optional_str(value: Any) -> Optional[str]:
    if value is None or pd.isna(value):
        return None
    return str(value)
