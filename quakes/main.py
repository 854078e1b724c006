# quakes/main.py
from __future__ import annotations
import logging, time
from pathlib import Path
from threading import Lock
from typing import Optional

import httpx
from fastapi import FastAPI, Request, Form, Response
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse
from fastapi.templating import Jinja2Templates

from prometheus_client import Counter, Gauge, Histogram, generate_latest, CONTENT_TYPE_LATEST

from quakes.dataset import ORDERINGS, FeedFormatError, QuakeDataset
from quakes.feed import InvalidSelector, QuakeFeed

DEFAULT_LEVEL = "all"
DEFAULT_PERIOD = "hour"

BASE_DIR = Path(__file__).resolve().parent
TEMPLATES_DIR = BASE_DIR / "templates"

log = logging.getLogger(__name__)

app = FastAPI(title="Quake Info")
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

# the dataset is not thread-safe; every access goes through _lock
dataset = QuakeDataset()
_lock = Lock()
_current: dict = {"feed": None}

# ---------- metrics ----------
INGEST_COUNT    = Counter("quakes_ingested_total", "Total quakes ingested")
INGEST_FAILURES = Counter("ingest_failures_total", "Failed feed updates")
LAST_INGEST_TS  = Gauge(  "last_ingest_timestamp",  "Last ingest epoch millis")
INGEST_LATENCY  = Histogram("ingest_duration_seconds", "Ingest duration")


def _ordering(by: Optional[str]):
    if by is None:
        return ORDERINGS["time"]
    return ORDERINGS.get(by)


def _bad_ordering(by: str) -> JSONResponse:
    return JSONResponse(
        {"error": f"unknown ordering {by!r}: must be one of {', '.join(ORDERINGS)}"},
        status_code=400,
    )


@app.post("/ingest")
def ingest(level: str = Form(DEFAULT_LEVEL), period: str = Form(DEFAULT_PERIOD)):
    try:
        feed = QuakeFeed(level, period)
    except InvalidSelector as exc:
        return JSONResponse({"error": str(exc)}, status_code=400)

    start = time.time()
    # the fetch runs outside _lock
    try:
        text = feed.read()
    except httpx.HTTPError as exc:
        INGEST_FAILURES.inc()
        log.warning("fetch failed for %r: %s", feed, exc)
        return JSONResponse({"error": f"cannot fetch {feed}: {exc}"}, status_code=502)

    with _lock:
        try:
            dataset.ingest(text)
        except FeedFormatError as exc:
            INGEST_FAILURES.inc()
            log.warning("bad data in %r: %s", feed, exc)
            return JSONResponse({"error": f"bad data in {feed}: {exc}"}, status_code=422)
        n = dataset.size
        _current["feed"] = str(feed)

    INGEST_COUNT.inc(n)
    LAST_INGEST_TS.set(int(time.time() * 1000))
    INGEST_LATENCY.observe(time.time() - start)
    log.info("ingested %d quakes from %r", n, feed)
    return {"feed": str(feed), "ingested": n}


@app.get("/summary")
def summary():
    with _lock:
        return dataset.summary()


@app.get("/quakes")
def list_quakes(by: Optional[str] = None):
    ordering = _ordering(by)
    if ordering is None:
        return _bad_ordering(by)
    key, reverse = ordering
    with _lock:
        return [q.to_dict() for q in dataset.ordered(key, reverse)]


@app.get("/table", response_class=PlainTextResponse)
def table(by: Optional[str] = None):
    ordering = _ordering(by)
    if ordering is None:
        return _bad_ordering(by)
    key, reverse = ordering
    with _lock:
        return dataset.as_table(key, reverse)


@app.get("/", response_class=HTMLResponse)
def home(request: Request, by: Optional[str] = None):
    ordering = _ordering(by)
    if ordering is None:
        return _bad_ordering(by)
    key, reverse = ordering
    with _lock:
        context = {
            "feed": _current["feed"],
            "summary": dataset.summary(),
            "table": dataset.as_html_table("quakes", key, reverse),
            "orderings": list(ORDERINGS),
        }
    return templates.TemplateResponse(request, "index.html", context)


# ---------- metrics ----------
@app.get("/metrics")
def metrics():
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)
