# quakes/info.py
from __future__ import annotations
import argparse, logging, sys
from typing import Optional, Sequence

import httpx

from quakes.dataset import ORDERINGS, FeedFormatError, QuakeDataset
from quakes.feed import InvalidSelector, QuakeFeed, LEVELS, PERIODS

log = logging.getLogger(__name__)


def summarize(data: QuakeDataset) -> None:
    print()
    print(f"{data.size} quakes acquired")
    if data.shallowest_quake:
        print("Shallowest was at %.2f km" % data.shallowest_quake.depth)
    if data.deepest_quake:
        print("Deepest was at %.2f km" % data.deepest_quake.depth)
    if data.weakest_quake:
        print("Weakest had a magnitude of %.1f" % data.weakest_quake.magnitude)
    if data.strongest_quake:
        print("Strongest had a magnitude of %.1f" % data.strongest_quake.magnitude)
    if data.mean_depth is not None:
        print("Mean depth = %.2f km" % data.mean_depth)
    if data.mean_magnitude is not None:
        print("Mean magnitude = %.1f" % data.mean_magnitude)


def display_table(data: QuakeDataset, ordering: Optional[str]) -> None:
    key, reverse = ORDERINGS[ordering or "time"]
    print()
    print(data.as_table(key, reverse), end="")


def main(argv: Optional[Sequence[str]] = None) -> int:
    ap = argparse.ArgumentParser(
        prog="quakeinfo",
        description="Extracts information from a USGS earthquake data feed.",
    )
    ap.add_argument("-s", "--summary", action="store_true", help="Display summary statistics")
    ap.add_argument("-t", "--table", action="store_true", help="Display table of quake details")
    ap.add_argument("-b", "--by", choices=["+depth", "-depth", "+mag", "-mag"],
                    help="Sort order for quake details (write descending orders as --by=-mag)")
    ap.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    ap.add_argument("level", help=f"Severity level of quake feed ({', '.join(LEVELS)})")
    ap.add_argument("period", help=f"Time period of quake feed ({', '.join(PERIODS)})")
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        feed = QuakeFeed(args.level, args.period)
    except InvalidSelector as exc:
        print(f"quakeinfo: {exc}", file=sys.stderr)
        return 2

    log.debug("reading %r from %s", feed, feed.locate())
    data = QuakeDataset()
    try:
        data.update(feed)
    except (httpx.HTTPError, FeedFormatError) as exc:
        print(f"quakeinfo: cannot read {feed}: {exc}", file=sys.stderr)
        return 1

    if args.summary:
        summarize(data)
    if args.table:
        display_table(data, args.by)
    return 0


if __name__ == "__main__":
    sys.exit(main())
