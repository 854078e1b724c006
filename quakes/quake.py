# quakes/quake.py
from __future__ import annotations
from dataclasses import dataclass, asdict
from datetime import datetime


class InvalidQuake(ValueError):
    """Raised when a Quake field breaks its range constraint."""

    def __init__(self, field: str, message: str):
        super().__init__(f"Invalid {field}: {message}")
        self.field = field


@dataclass(frozen=True, order=True)
class Quake:
    """
    One seismic event taken from a USGS feed.

    time is a UTC instant, longitude/latitude are in degrees,
    depth is in km below the surface.
    """
    time: datetime
    longitude: float
    latitude: float
    depth: float
    magnitude: float

    def __post_init__(self) -> None:
        if not isinstance(self.time, datetime) or self.time.tzinfo is None:
            raise InvalidQuake("time", "must be a timezone-aware datetime")
        # comparisons are written so that NaN fails them
        if not -180.0 <= self.longitude <= 180.0:
            raise InvalidQuake("longitude", "must be in [-180, 180]")
        if not -90.0 <= self.latitude <= 90.0:
            raise InvalidQuake("latitude", "must be in [-90, 90]")
        if not self.depth >= 0.0:
            raise InvalidQuake("depth", "must be >= 0")
        if not self.magnitude > 0.0:
            raise InvalidQuake("magnitude", "must be > 0")

    def to_dict(self) -> dict:
        d = asdict(self)
        d["time"] = self.time.isoformat()
        return d
