class LunarisError(Exception):
    """Base error."""

class InvalidDate(LunarisError, ValueError):
    """Calendar fields or a Julian Day that cannot be converted."""

class InvalidObserver(LunarisError, ValueError):
    """Observer latitude/longitude out of range or not finite."""

class TableRangeWarning(UserWarning):
    """Delta T requested outside the tabulated range (value is extrapolated)."""

class SolverNonConvergence(UserWarning):
    """Rise/set/transit iteration hit its cap (last estimate is returned)."""
