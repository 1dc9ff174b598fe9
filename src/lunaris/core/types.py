from __future__ import annotations
from dataclasses import astuple, dataclass, fields
from math import isfinite
from typing import Literal, Optional, Tuple

from .errors import InvalidObserver
from .time import julian_day_from_hms

PhaseName = Literal[
    "New Moon",
    "Waxing Crescent",
    "First Quarter",
    "Waxing Gibbous",
    "Full Moon",
    "Waning Gibbous",
    "Last Quarter",
    "Waning Crescent",
]

@dataclass(frozen=True)
class Observer:
    """
    Observer on the Earth's surface.

    longitude is WEST-positive degrees (Meeus), latitude north-positive,
    height in metres above sea level, pressure in millibars, temperature in
    Celsius, utc_offset in hours (civil time = UTC + utc_offset).
    """
    longitude: float
    latitude: float
    height: float = 0.0
    pressure: float = 1013.0
    temperature: float = 10.0
    utc_offset: float = 0.0

    def __post_init__(self) -> None:
        for name in ("longitude", "latitude", "height", "pressure", "temperature", "utc_offset"):
            if not isfinite(getattr(self, name)):
                raise InvalidObserver(f"{name} must be finite, got {getattr(self, name)!r}")
        if not (-90.0 <= self.latitude <= 90.0):
            raise InvalidObserver(f"latitude must be in [-90, 90], got {self.latitude}")
        if not (-180.0 <= self.longitude <= 180.0):
            raise InvalidObserver(f"longitude must be in [-180, 180], got {self.longitude}")

    @classmethod
    def from_east_longitude(cls, longitude_east: float, latitude: float, **kwargs) -> "Observer":
        return cls(longitude=-longitude_east, latitude=latitude, **kwargs)

    @property
    def longitude_east(self) -> float:
        return -self.longitude


@dataclass(frozen=True)
class DateTimeResult:
    """
    Calendar fields of an event time.

    When is_valid is False the event does not happen in the queried day and
    the numeric fields carry no meaning.
    """
    is_valid: bool
    year: int
    month: int
    day: int
    hour: int
    minute: int
    second: float

    @classmethod
    def invalid(cls) -> "DateTimeResult":
        return cls(False, 0, 0, 0, 0, 0, 0.0)

    def as_tuple(self) -> Tuple:
        return astuple(self)


@dataclass(frozen=True)
class MoonInput:
    """Fixed-layout input record: field order is part of the interface."""
    jd: float
    longitude: float
    latitude: float
    height: float
    pressure: float = 1013.0
    temperature: float = 10.0
    utc_offset: float = 0.0

    @classmethod
    def from_calendar(
        cls,
        year: int,
        month: int,
        day: int,
        hour: int = 0,
        minute: int = 0,
        second: float = 0.0,
        *,
        longitude: float,
        latitude: float,
        height: float = 0.0,
        **kwargs,
    ) -> "MoonInput":
        """Build an input from calendar fields (the Julian Day of that instant)."""
        jd = julian_day_from_hms(year, month, day, hour, minute, second)
        return cls(jd, longitude, latitude, height, **kwargs)

    @property
    def observer(self) -> Observer:
        return Observer(
            longitude=self.longitude,
            latitude=self.latitude,
            height=self.height,
            pressure=self.pressure,
            temperature=self.temperature,
            utc_offset=self.utc_offset,
        )

    def as_tuple(self) -> Tuple:
        return astuple(self)


@dataclass(frozen=True)
class MoonOutput:
    """
    Fixed-layout output record.

    phase_angle          Moon-Sun elongation in longitude folded into [0, 180]
    illumination_angle   Sun-Moon-Earth angle i, [0, 180]
    phase_age            days since new moon
    illuminated_fraction [0, 1]
    longitude, latitude  apparent geocentric ecliptic coordinates
    distance             Earth-Moon distance, km
    hour_angle           topocentric local hour angle, [0, 360)
    right_ascension      topocentric, [0, 360)
    declination          topocentric
    azimuth, altitude    horizontal, azimuth from North through East,
                         altitude corrected for refraction
    rise, transit, set   UTC shifted by the observer's utc_offset
    """
    phase_angle: float
    illumination_angle: float
    phase_age: float
    illuminated_fraction: float
    phase_name: PhaseName
    longitude: float
    latitude: float
    distance: float
    hour_angle: float
    right_ascension: float
    declination: float
    azimuth: float
    altitude: float
    rise: Optional[DateTimeResult] = None
    transit: Optional[DateTimeResult] = None
    set: Optional[DateTimeResult] = None

    def as_tuple(self) -> Tuple:
        """Flat tuple in field order; missing events become an invalid record."""
        out = []
        for f in fields(self):
            name = f.name
            v = getattr(self, name)
            if name in ("rise", "transit", "set"):
                out.extend((v or DateTimeResult.invalid()).as_tuple())
            else:
                out.append(v)
        return tuple(out)
