# engine_params.py
# Converts JSON request documents into engine inputs and schedules back into JSON.

from typing import Any, Dict, List, Optional

from errors import InvalidRequest
from grid import Grid, Pool, Schedule
from schedule_finder import EngineParams

__all__ = [
    "DEFAULT_TIME_FORMAT", "grid_from_json", "params_from_json", "resolve_format", "schedules_to_json",
]

DEFAULT_TIME_FORMAT = "%H:%M"


def _require(body: Dict[str, Any], key: str, kind: type, where: str) -> Any:
    if key not in body:
        raise InvalidRequest(f"{where} is missing '{key}'")
    value = body[key]
    # bool is an int subclass; never accept it as a count.
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise InvalidRequest(f"{where}: '{key}' must be of type {kind.__name__}")
    return value


def _pool_id(value: Any, where: str) -> Any:
    # Pool ids are compared and hashed, so only JSON scalars qualify.
    if value is None:
        raise InvalidRequest(f"{where} is missing 'poolId'")
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise InvalidRequest(f"{where}: 'poolId' must be a string or a number")
    return value


def resolve_format(body: Dict[str, Any], default_format: str = DEFAULT_TIME_FORMAT) -> str:
    # The document may override the time format.
    fmt = body.get("format", default_format)
    if not isinstance(fmt, str) or not fmt:
        raise InvalidRequest("'format' must be a non-empty string")
    return fmt


def grid_from_json(body: Any, fmt: str, pool_id: Optional[Any] = None, where: str = "grid") -> Grid:
    # A grid is {"poolId": ..., "times": [14 strings], "data": ...}; pools pass their id down.
    if not isinstance(body, dict):
        raise InvalidRequest(f"{where} must be an object")
    if body.get("poolId") is not None:
        pool_id = body["poolId"]
    pool_id = _pool_id(pool_id, where)
    times = _require(body, "times", list, where)
    if not all(isinstance(t, str) for t in times):
        raise InvalidRequest(f"{where}: 'times' must only hold strings")
    return Grid.from_flat(pool_id, times, fmt, body.get("data"))


def pool_from_json(body: Any, fmt: str, where: str = "pool") -> Pool:
    if not isinstance(body, dict):
        raise InvalidRequest(f"{where} must be an object")
    pool = Pool(_pool_id(body.get("poolId"), where))
    for k, grid in enumerate(_require(body, "grids", list, where)):
        pool.push(grid_from_json(grid, fmt, pool.pool_id, f"{where}.grids[{k}]"))
    return pool


def params_from_json(body: Any, default_format: str = DEFAULT_TIME_FORMAT) -> EngineParams:
    # Builds engine parameters from a request document.
    if not isinstance(body, dict):
        raise InvalidRequest("Request body must be a JSON object")

    fmt = resolve_format(body, default_format)

    raw_seeds = _require(body, "seeds", list, "request") if "seeds" in body else []
    seeds = [grid_from_json(seed, fmt, where=f"seeds[{k}]") for k, seed in enumerate(raw_seeds)]
    pools = [
        pool_from_json(pool, fmt, f"pools[{k}]")
        for k, pool in enumerate(_require(body, "pools", list, "request"))
    ]
    bound = _require(body, "bound", int, "request")
    return EngineParams(seeds=seeds, bound=bound, pool_list=pools)


def schedules_to_json(schedules: List[Schedule], fmt: str = DEFAULT_TIME_FORMAT) -> List[List[Dict[str, Any]]]:
    return [
        [{"poolId": grid.pool_id, "times": grid.to_flat(fmt), "data": grid.data} for grid in schedule]
        for schedule in schedules
    ]
