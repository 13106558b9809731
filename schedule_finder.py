# schedule_finder.py
# Exhaustively enumerates all conflict-free schedules using a backtracking DFS over pool combinations.

import itertools
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Sequence

from errors import DuplicatePoolId, EmptyStack, InvalidBound, ScheduleConflict, SearchCancelled, SeedConflict
from grid import Day, Grid, Pool, Schedule

__all__ = ["EngineParams", "engine_run", "run_params", "find_unresolvable_pairs", "grids_conflict"]

logger = logging.getLogger(__name__)

StopCheck = Callable[[], bool]


@dataclass
class EngineParams:
    # Grids merged before the search; every result contains them.
    seeds: List[Grid] = field(default_factory=list)
    # Number of pools each result draws exactly one grid from.
    bound: int = 0
    pool_list: List[Pool] = field(default_factory=list)


def engine_run(
    seeds: Sequence[Grid],
    bound: int,
    pool_list: Sequence[Pool],
    should_stop: Optional[StopCheck] = None,
) -> List[Schedule]:
    # Return every schedule made of the seeds plus one grid from each of `bound` pools.
    _check_inputs(bound, pool_list)

    baseline = Schedule()
    for seed in seeds:
        try:
            baseline.try_merge(seed)
        except ScheduleConflict as exc:
            raise SeedConflict(f"Seed grids are not compatible: {exc}") from exc

    schedules: List[Schedule] = []
    combos = 0
    for combination in itertools.combinations(pool_list, bound):
        found = _search_combination(baseline, combination, should_stop)
        logger.debug(
            "Combination %s produced %d schedule(s)",
            [pool.pool_id for pool in combination], len(found),
        )
        schedules.extend(found)
        combos += 1

    logger.info(
        "Searched %d combination(s) of %d pool(s) with %d seed(s): %d schedule(s)",
        combos, bound, len(seeds), len(schedules),
    )
    return schedules


def run_params(params: EngineParams, should_stop: Optional[StopCheck] = None) -> List[Schedule]:
    return engine_run(params.seeds, params.bound, params.pool_list, should_stop)


def _check_inputs(bound: int, pool_list: Sequence[Pool]) -> None:
    if bound < 0 or len(pool_list) < bound:
        raise InvalidBound(f"Bound {bound} must be between 0 and the number of pools ({len(pool_list)})")

    seen = set()
    for pool in pool_list:
        if pool.pool_id in seen:
            raise DuplicatePoolId(f"Found repeated pool id {pool.pool_id!r}; pool ids must be unique")
        seen.add(pool.pool_id)

    if bound == 0:
        raise EmptyStack("Bound is 0, so every combination is an empty stack")
    for pool in pool_list:
        if not pool.grid_list:
            raise EmptyStack(f"Pool {pool.pool_id!r} has no grids to pick from")


def _search_combination(
    baseline: Schedule,
    levels: Sequence[Pool],
    should_stop: Optional[StopCheck],
) -> List[Schedule]:
    # Suppose the combination (or "stack") is {A, B, C} with
    # A -> [a1, a2, ...], B -> [b1, b2, ...], C -> [c1, c2, ...].
    # Each pool is a stack level; the top of the stack (C) is decided first,
    # so we collect every valid traversal C -> B -> A.
    found: List[Schedule] = []
    schedule = baseline.copy()  # The current path, seeds first, in the DFS traversal.

    def dfs(i: int) -> None:
        if should_stop is not None and should_stop():
            raise SearchCancelled("Search stopped by caller")

        last = i == 0
        for grid in levels[i].grid_list:
            # Prune this search branch if the grid conflicts with the current path.
            try:
                schedule.try_merge(grid)
            except ScheduleConflict:
                continue
            if last:
                found.append(schedule.copy())
            else:
                dfs(i - 1)
            schedule.remove_last_added()

    dfs(len(levels) - 1)
    return found


def grids_conflict(a: Grid, b: Grid) -> bool:
    # Determines if two grids overlap on any given day.
    for day in Day:
        taken = b.at(day)
        if taken is not None and not a.free_at(day, taken):
            return True
    return False


def find_unresolvable_pairs(pool_list: Sequence[Pool]) -> List[List[Any]]:
    # Identifies pairs of pools for which no non-conflicting grid combination exists.
    bad_pairs = []
    for i in range(len(pool_list)):
        for j in range(i + 1, len(pool_list)):
            a, b = pool_list[i], pool_list[j]
            if not any(not grids_conflict(ga, gb) for ga in a.grid_list for gb in b.grid_list):
                bad_pairs.append([a.pool_id, b.pool_id])
    return bad_pairs
