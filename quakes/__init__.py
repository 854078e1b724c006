from quakes.quake import InvalidQuake, Quake
from quakes.feed import InvalidSelector, Level, Period, QuakeFeed, LEVELS, PERIODS
from quakes.dataset import FeedFormatError, QuakeDataset, ORDERINGS

__all__ = [
    "Quake", "InvalidQuake",
    "QuakeFeed", "Level", "Period", "LEVELS", "PERIODS", "InvalidSelector",
    "QuakeDataset", "FeedFormatError", "ORDERINGS",
]
