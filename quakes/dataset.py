"""
In-memory dataset of quakes acquired from a USGS CSV feed.

Feed lines look like::

    time,latitude,longitude,depth,mag,magType,...,place,...
    2024-06-24T13:36:06.753Z,-21.9489,-179.5316,588.529,5.1,mb,...,"Fiji region",...

Only the first five columns are used. None of them contain commas, so a
plain split is enough even though later quoted columns may.
"""
from __future__ import annotations
import html
import logging
import re
from datetime import datetime
from operator import attrgetter
from statistics import fmean
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple

from quakes.feed import QuakeFeed
from quakes.quake import Quake

MIN_FIELD_COUNT = 5
TIME_FIELD, LAT_FIELD, LON_FIELD, DEPTH_FIELD, MAG_FIELD = range(5)

# only real line endings; quoted place names may hold other separators
LINE_BREAK = re.compile(r"\r\n|\r|\n")
TIMESTAMP = re.compile(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d+)?(Z|[+-]\d{2}:\d{2})", re.ASCII)
NUMBER = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?", re.ASCII)

TABLE_RULE = "+-----------+----------+--------+-----+"
TABLE_HEADER = "|    Lon    |   Lat    |  Depth | Mag |"

log = logging.getLogger(__name__)

SortKey = Callable[[Quake], Any]

by_time: SortKey = attrgetter("time")
by_depth: SortKey = attrgetter("depth")
by_magnitude: SortKey = attrgetter("magnitude")

# name -> (key, reverse)
ORDERINGS: Dict[str, Tuple[SortKey, bool]] = {
    "time": (by_time, False),
    "+depth": (by_depth, False),
    "-depth": (by_depth, True),
    "+mag": (by_magnitude, False),
    "-mag": (by_magnitude, True),
}


class FeedFormatError(ValueError):
    """A data line could not be turned into a Quake."""

    def __init__(self, lineno: int, message: str):
        super().__init__(f"line {lineno}: {message}")
        self.lineno = lineno


def parse_time(text: str) -> datetime:
    """ISO-8601 date-time with an explicit offset, e.g. 2024-06-24T13:36:06.753Z."""
    if not TIMESTAMP.fullmatch(text):
        raise ValueError(f"Invalid timestamp: {text!r}")
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


def parse_number(text: str) -> float:
    """Plain decimal number; no whitespace, underscores, nan or inf."""
    if not NUMBER.fullmatch(text):
        raise ValueError(f"Invalid number: {text!r}")
    return float(text)


def parse_line(line: str) -> Optional[Quake]:
    """Quake for one data line, or None if the line is too short."""
    fields = line.split(",")
    if len(fields) < MIN_FIELD_COUNT:
        return None
    time = parse_time(fields[TIME_FIELD])
    lat = parse_number(fields[LAT_FIELD])
    lon = parse_number(fields[LON_FIELD])
    depth = parse_number(fields[DEPTH_FIELD])
    mag = parse_number(fields[MAG_FIELD])
    return Quake(time, lon, lat, depth, mag)


class QuakeDataset:
    """
    Ordered collection of quakes plus summary statistics and tables.

    Not thread-safe: ingest() swaps the whole collection, so callers
    sharing a dataset must serialise access themselves.
    """

    def __init__(self):
        self._quakes: List[Quake] = []

    # ---------- ingestion ----------
    def ingest(self, text: str) -> None:
        """
        Replace the contents of this dataset with the quakes in text.

        Raises FeedFormatError if any data line is malformed, in which
        case the dataset keeps its previous contents.
        """
        quakes: List[Quake] = []
        skipped = 0
        lines = LINE_BREAK.split(text)
        # line 1 is the header
        for lineno, line in enumerate(lines[1:], start=2):
            if not line.strip():
                continue
            try:
                q = parse_line(line)
            except ValueError as exc:
                raise FeedFormatError(lineno, str(exc)) from exc
            if q is None:
                skipped += 1
                log.debug("skipping short line %d", lineno)
                continue
            quakes.append(q)

        self._quakes = quakes
        log.debug("ingested %d quakes (%d short lines skipped)", len(quakes), skipped)

    def update(self, feed: QuakeFeed) -> None:
        """Replace the contents of this dataset with fresh data from feed."""
        self.ingest(feed.read())

    # ---------- queries ----------
    @property
    def size(self) -> int:
        return len(self._quakes)

    def __len__(self) -> int:
        return len(self._quakes)

    def is_empty(self) -> bool:
        return not self._quakes

    def __getitem__(self, index: int) -> Quake:
        if not 0 <= index < len(self._quakes):
            raise IndexError(f"quake index {index} out of range for dataset of size {self.size}")
        return self._quakes[index]

    def __iter__(self) -> Iterator[Quake]:
        return iter(tuple(self._quakes))

    # min()/max() keep the first of equal items, so ties go to the earliest quake
    @property
    def shallowest_quake(self) -> Optional[Quake]:
        return min(self._quakes, key=by_depth, default=None)

    @property
    def deepest_quake(self) -> Optional[Quake]:
        return max(self._quakes, key=by_depth, default=None)

    @property
    def weakest_quake(self) -> Optional[Quake]:
        return min(self._quakes, key=by_magnitude, default=None)

    @property
    def strongest_quake(self) -> Optional[Quake]:
        return max(self._quakes, key=by_magnitude, default=None)

    @property
    def mean_depth(self) -> Optional[float]:
        return fmean(q.depth for q in self._quakes) if self._quakes else None

    @property
    def mean_magnitude(self) -> Optional[float]:
        return fmean(q.magnitude for q in self._quakes) if self._quakes else None

    def summary(self) -> Dict[str, Any]:
        def as_dict(q: Optional[Quake]):
            return q.to_dict() if q is not None else None

        return {
            "size": self.size,
            "shallowest": as_dict(self.shallowest_quake),
            "deepest": as_dict(self.deepest_quake),
            "weakest": as_dict(self.weakest_quake),
            "strongest": as_dict(self.strongest_quake),
            "mean_depth": self.mean_depth,
            "mean_magnitude": self.mean_magnitude,
        }

    # ---------- rendering ----------
    def ordered(self, key: SortKey = by_time, reverse: bool = False) -> List[Quake]:
        """Copy of the quakes in the given order; the dataset itself is untouched."""
        return sorted(self._quakes, key=key, reverse=reverse)

    def as_table(self, key: SortKey = by_time, reverse: bool = False) -> str:
        """Quakes as a bordered plain-text table, sorted by key (time by default)."""
        lines = [TABLE_RULE, TABLE_HEADER, TABLE_RULE]
        for q in self.ordered(key, reverse):
            lines.append("| %9.4f | %8.4f | %6.2f | %3.1f |" % (
                q.longitude, q.latitude, q.depth, q.magnitude))
        lines.append(TABLE_RULE)
        return "\n".join(lines) + "\n"

    def as_html_table(self, id: str = "", key: SortKey = by_time, reverse: bool = False) -> str:
        """
        Quakes as an HTML table, sorted by key (time by default).

        A non-blank id becomes the table's id attribute, for styling.
        """
        lines = [
            f'<table id="{html.escape(id)}">' if id.strip() else "<table>",
            "<thead>",
            "<tr><th>Lon</th><th>Lat</th><th>Depth</th><th>Mag</th></tr>",
            "</thead>",
            "<tbody>",
        ]
        for q in self.ordered(key, reverse):
            lines.append("<tr><td>%.4f</td><td>%.4f</td><td>%.2f</td><td>%.1f</td></tr>" % (
                q.longitude, q.latitude, q.depth, q.magnitude))
        lines += ["</tbody>", "</table>"]
        return "\n".join(lines) + "\n"
