# quakes/feed.py
from __future__ import annotations
from enum import Enum
from typing import Callable, Optional, Union

from quakes.usgs import fetch_text

FEED_URL_TEMPLATE = "https://earthquake.usgs.gov/earthquakes/feed/v1.0/summary/{level}_{period}.csv"


class Level(str, Enum):
    ALL = "all"
    M1_0 = "1.0"
    M2_5 = "2.5"
    M4_5 = "4.5"
    SIGNIFICANT = "significant"


class Period(str, Enum):
    HOUR = "hour"
    DAY = "day"
    WEEK = "week"
    MONTH = "month"


LEVELS = tuple(m.value for m in Level)
PERIODS = tuple(m.value for m in Period)


class InvalidSelector(ValueError):
    pass


def _select(enum_cls, value, name: str, allowed: tuple):
    try:
        return enum_cls(value)
    except ValueError:
        raise InvalidSelector(
            f"Invalid {name} {value!r}: must be one of {', '.join(allowed)}"
        ) from None


class QuakeFeed:
    """
    A USGS Earthquake Hazards Program CSV feed, picked by severity
    level and time period.

    read() is the only I/O; it goes through the fetch callable
    (url -> text), which defaults to an httpx GET.
    """

    __slots__ = ("_level", "_period", "_fetch")

    def __init__(self,
                 level: Union[Level, str],
                 period: Union[Period, str],
                 fetch: Optional[Callable[[str], str]] = None):
        self._level = _select(Level, level, "level", LEVELS)
        self._period = _select(Period, period, "period", PERIODS)
        self._fetch = fetch or fetch_text

    @property
    def level(self) -> str:
        return self._level.value

    @property
    def period(self) -> str:
        return self._period.value

    def locate(self) -> str:
        return FEED_URL_TEMPLATE.format(level=self.level, period=self.period)

    def read(self) -> str:
        return self._fetch(self.locate())

    def __repr__(self) -> str:
        return f'QuakeFeed(level="{self.level}", period="{self.period}")'

    def __eq__(self, other) -> bool:
        if not isinstance(other, QuakeFeed):
            return NotImplemented
        return (self._level, self._period) == (other._level, other._period)

    def __hash__(self) -> int:
        return hash((self._level, self._period))
