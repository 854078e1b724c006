import pytest
import respx
from httpx import Response
from fastapi.testclient import TestClient

import quakes.main as web
from quakes.dataset import QuakeDataset
from quakes.feed import QuakeFeed

client = TestClient(web.app)

FEED = QuakeFeed("2.5", "day")


@pytest.fixture(autouse=True)
def fresh_dataset(monkeypatch):
    monkeypatch.setattr(web, "dataset", QuakeDataset())
    monkeypatch.setitem(web._current, "feed", None)


def ingest(sample_csv):
    with respx.mock:
        respx.get(FEED.locate()).mock(return_value=Response(200, text=sample_csv))
        return client.post("/ingest", data={"level": "2.5", "period": "day"})


def test_ingest_then_summary(sample_csv):
    res = ingest(sample_csv)
    assert res.status_code == 200
    assert res.json() == {"feed": 'QuakeFeed(level="2.5", period="day")', "ingested": 5}

    s = client.get("/summary").json()
    assert s["size"] == 5
    assert s["shallowest"]["depth"] == 10.0
    assert s["strongest"]["magnitude"] == 6.3
    assert s["mean_depth"] == pytest.approx(177.7516)

def test_quakes_sorted(sample_csv):
    ingest(sample_csv)
    depths = [q["depth"] for q in client.get("/quakes", params={"by": "-depth"}).json()]
    assert depths == [588.529, 156.689, 103.228, 30.312, 10.0]
    times = [q["time"] for q in client.get("/quakes").json()]
    assert times == sorted(times)

def test_table_text(sample_csv):
    ingest(sample_csv)
    res = client.get("/table", params={"by": "+mag"})
    assert res.status_code == 200
    assert res.headers["content-type"].startswith("text/plain")
    assert res.text.splitlines()[3] == "|   84.2612 |  40.9706 |  10.00 | 4.6 |"

def test_unknown_ordering():
    assert client.get("/table", params={"by": "size"}).status_code == 400
    assert client.get("/quakes", params={"by": "size"}).status_code == 400

def test_home_page(sample_csv):
    assert "0 quakes acquired" in client.get("/").text
    ingest(sample_csv)
    page = client.get("/").text
    assert '<table id="quakes">' in page
    assert "5 quakes acquired" in page
    assert "Mean depth = 177.75 km" in page

def test_invalid_selector_rejected_without_fetch():
    with respx.mock:
        res = client.post("/ingest", data={"level": "4.6", "period": "week"})
    assert res.status_code == 400
    assert "Invalid level" in res.json()["error"]

def test_fetch_failure_keeps_previous_data(sample_csv):
    ingest(sample_csv)
    with respx.mock:
        respx.get(FEED.locate()).mock(return_value=Response(500))
        res = client.post("/ingest", data={"level": "2.5", "period": "day"})
    assert res.status_code == 502
    assert client.get("/summary").json()["size"] == 5

def test_bad_feed_data(header_only):
    res = ingest(header_only + "2024-01-01T00:00:00.000Z,1.0,2.0,deep,4.0\n")
    assert res.status_code == 422
    assert "line 2" in res.json()["error"]
    assert client.get("/summary").json()["size"] == 0

def test_metrics(sample_csv):
    ingest(sample_csv)
    res = client.get("/metrics")
    assert res.status_code == 200
    assert "quakes_ingested_total" in res.text

def test_fetch_runs_outside_the_lock(sample_csv):
    held = []

    def respond(request):
        held.append(web._lock.locked())
        return Response(200, text=sample_csv)

    with respx.mock:
        respx.get(FEED.locate()).mock(side_effect=respond)
        res = client.post("/ingest", data={"level": "2.5", "period": "day"})
    assert res.status_code == 200
    assert held == [False]
