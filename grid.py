# grid.py
# Weekly time-table primitives: days, time ranges, grids, pools and schedules.

import copy
from dataclasses import dataclass
from datetime import datetime, time
from enum import IntEnum
from typing import Any, Hashable, Iterator, List, Optional, Sequence, Tuple

from errors import InvalidTimeRange, MalformedFlatInput, PoolMismatch, ScheduleConflict, TimeParseError

__all__ = ["Day", "TimeRange", "Grid", "Pool", "Schedule"]

DAYS_PER_WEEK = 7
FLAT_LENGTH = DAYS_PER_WEEK * 2


class Day(IntEnum):
    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6


@dataclass(frozen=True)
class TimeRange:
    start: time
    end: time

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise InvalidTimeRange(f"Invalid time range: {self.start} - {self.end}")

    def compatible_with(self, other: "TimeRange") -> bool:
        # Touching endpoints do not overlap: (07:00, 08:00) fits before (08:00, 10:00).
        return self.end <= other.start or self.start >= other.end


def _as_range(value: Any) -> Optional[TimeRange]:
    if value is None or isinstance(value, TimeRange):
        return value
    try:
        start, end = value
    except (TypeError, ValueError):
        raise MalformedFlatInput(f"Expected a (start, end) pair, got {value!r}") from None
    return TimeRange(start, end)


def _parse_time(text: str, fmt: str) -> time:
    try:
        return datetime.strptime(text, fmt).time()
    except ValueError as exc:
        raise TimeParseError(f"Unable to parse {text!r} with format {fmt!r}") from exc


class Grid:
    """One weekly commitment option.

    ``time_values`` holds one optional :class:`TimeRange` per :class:`Day`,
    Monday first. ``pool_id`` groups the grid with its alternatives and
    ``data`` is an opaque payload the engine never looks at.
    """

    __slots__ = ("_time_values", "_pool_id", "_data")

    def __init__(self, pool_id: Hashable, time_values: Sequence[Any], data: Any = None):
        if len(time_values) != DAYS_PER_WEEK:
            raise MalformedFlatInput(f"Expected {DAYS_PER_WEEK} day slots, got {len(time_values)}")
        self._time_values: Tuple[Optional[TimeRange], ...] = tuple(_as_range(v) for v in time_values)
        self._pool_id = pool_id
        self._data = data

    @classmethod
    def from_flat(cls, pool_id: Hashable, values: Sequence[str], fmt: str, data: Any = None) -> "Grid":
        # values are ordered | MON | TUE | ... | SUN | with a begin and an end per day;
        # two empty strings mean nothing planned on that day.
        if len(values) != FLAT_LENGTH:
            raise MalformedFlatInput(f"Expected {FLAT_LENGTH} time values, got {len(values)}")

        time_values: List[Optional[TimeRange]] = []
        for i in range(0, FLAT_LENGTH, 2):
            begin, end = values[i], values[i + 1]
            if not begin and not end:
                time_values.append(None)
                continue
            if not begin or not end:
                raise MalformedFlatInput(f"Half-empty time pair for {Day(i // 2).name}: {begin!r}, {end!r}")
            time_values.append(TimeRange(_parse_time(begin, fmt), _parse_time(end, fmt)))

        return cls(pool_id, time_values, data)

    @property
    def pool_id(self) -> Hashable:
        return self._pool_id

    @property
    def data(self) -> Any:
        return self._data

    @property
    def time_values(self) -> Tuple[Optional[TimeRange], ...]:
        return self._time_values

    def at(self, day: Day) -> Optional[TimeRange]:
        return self._time_values[day]

    def free_at(self, day: Day, time_range: TimeRange) -> bool:
        mine = self._time_values[day]
        return mine is None or mine.compatible_with(time_range)

    def to_flat(self, fmt: str) -> List[str]:
        flat: List[str] = []
        for slot in self._time_values:
            if slot is None:
                flat.extend(("", ""))
            else:
                flat.extend((slot.start.strftime(fmt), slot.end.strftime(fmt)))
        return flat

    def clone(self) -> "Grid":
        # Time ranges are immutable; only the payload needs its own copy.
        return Grid(self._pool_id, self._time_values, copy.deepcopy(self._data))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return (self._pool_id, self._time_values, self._data) == (other._pool_id, other._time_values, other._data)

    def __hash__(self) -> int:
        return hash((self._pool_id, self._time_values))

    def __repr__(self) -> str:
        days = ", ".join(
            f"{Day(i).name[:3]} {r.start:%H:%M}-{r.end:%H:%M}"
            for i, r in enumerate(self._time_values) if r is not None
        )
        return f"Grid(pool_id={self._pool_id!r}, [{days}], data={self._data!r})"


class Pool:
    """A named group of mutually exclusive grids; a schedule picks at most one."""

    def __init__(self, pool_id: Hashable, grid_list: Optional[Sequence[Grid]] = None):
        self.pool_id = pool_id
        self.grid_list: List[Grid] = []
        for grid in grid_list or ():
            self.push(grid)

    def push(self, grid: Grid) -> None:
        if grid.pool_id != self.pool_id:
            raise PoolMismatch(f"Grid with pool id {grid.pool_id!r} pushed into pool {self.pool_id!r}")
        self.grid_list.append(grid)

    def __len__(self) -> int:
        return len(self.grid_list)

    def __iter__(self) -> Iterator[Grid]:
        return iter(self.grid_list)

    def __repr__(self) -> str:
        return f"Pool(pool_id={self.pool_id!r}, grids={len(self.grid_list)})"


class Schedule:
    """An accumulating list of grids that never overlap on any day."""

    def __init__(self) -> None:
        self._grids: List[Grid] = []

    @property
    def grids(self) -> Tuple[Grid, ...]:
        return tuple(self._grids)

    def try_merge(self, grid: Grid) -> None:
        # All-or-nothing: check every day before touching the list.
        for day in Day:
            for accepted in self._grids:
                taken = accepted.at(day)
                if taken is not None and not grid.free_at(day, taken):
                    raise ScheduleConflict(f"{grid!r} conflicts with {accepted!r} on {day.name}")
        self._grids.append(grid.clone())

    def remove_last_added(self) -> Optional[Grid]:
        if not self._grids:
            return None
        return self._grids.pop()

    def copy(self) -> "Schedule":
        duplicate = Schedule()
        duplicate._grids = [grid.clone() for grid in self._grids]
        return duplicate

    def __len__(self) -> int:
        return len(self._grids)

    def __iter__(self) -> Iterator[Grid]:
        return iter(self._grids)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Schedule):
            return NotImplemented
        return self._grids == other._grids

    def __repr__(self) -> str:
        return f"Schedule({self._grids!r})"
