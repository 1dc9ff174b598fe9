"""lunaris public API.

Keep this surface small: users should mostly interact with functions re-exported here.
"""

from .api import (
    compute,
    julian_day,
    local_sidereal_time,
    rise_transit_set_local,
    west_longitude,
)
from .core.errors import (
    InvalidDate,
    InvalidObserver,
    LunarisError,
    SolverNonConvergence,
    TableRangeWarning,
)
from .core.types import DateTimeResult, MoonInput, MoonOutput, Observer
from .format import hours_to_hms, to_dms, to_hms

__all__ = [
    "compute",
    "julian_day",
    "local_sidereal_time",
    "rise_transit_set_local",
    "west_longitude",
    "MoonInput",
    "MoonOutput",
    "DateTimeResult",
    "Observer",
    "LunarisError",
    "InvalidDate",
    "InvalidObserver",
    "TableRangeWarning",
    "SolverNonConvergence",
    "to_dms",
    "to_hms",
    "hours_to_hms",
]
