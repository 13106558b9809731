# errors.py
# Exception types raised by the schedule engine and the request codec.


class ScheduleEngineError(Exception):
    """Base class for every error raised by the engine."""


class InvalidTimeRange(ScheduleEngineError, ValueError):
    """Raised when a time range starts after it ends."""

    pass


class MalformedFlatInput(ScheduleEngineError, ValueError):
    """Raised when a flattened time list has the wrong shape or a half-empty day."""

    pass


class TimeParseError(ScheduleEngineError, ValueError):
    """Raised when a time string does not match the given format."""

    pass


class InvalidBound(ScheduleEngineError):
    """Raised when the bound is negative or larger than the number of pools."""

    pass


class DuplicatePoolId(ScheduleEngineError):
    """Raised when two pools share the same pool id."""

    pass


class SeedConflict(ScheduleEngineError):
    """Raised when the seed grids overlap with one another."""

    pass


class ScheduleConflict(ScheduleEngineError):
    """Raised when a grid cannot be merged into a schedule."""

    pass


class EmptyStack(ScheduleEngineError):
    """Raised when a search level has no grid to pick from."""

    pass


class PoolMismatch(ScheduleEngineError):
    """Raised when a grid is pushed into a pool with a different pool id."""

    pass


class SearchCancelled(ScheduleEngineError):
    """Raised when the caller's stop check asks the search to give up."""

    pass


class InvalidRequest(ScheduleEngineError):
    """Raised when a request document is missing fields or has the wrong types."""

    pass


# Mapping of engine errors to HTTP status codes
ERROR_STATUS = {
    InvalidTimeRange: 400,
    MalformedFlatInput: 400,
    TimeParseError: 400,
    InvalidBound: 400,
    DuplicatePoolId: 400,
    SeedConflict: 409,
    EmptyStack: 400,
    PoolMismatch: 400,
    SearchCancelled: 503,
    InvalidRequest: 400,
}


def status_for(exc: ScheduleEngineError) -> int:
    # Walk the MRO so subclasses inherit their parent's status.
    for cls in type(exc).__mro__:
        if cls in ERROR_STATUS:
            return ERROR_STATUS[cls]
    return 500
