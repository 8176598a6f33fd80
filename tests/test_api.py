import threading
import pytest
from fastapi.testclient import TestClient
from hilo.api.main import create_app
from hilo.config import Settings


def body(values, period_id):
    obs = [{"value": v} for v in values]
    obs[0]["period_id"] = period_id
    return {"observations": obs}


@pytest.fixture
def client():
    app = create_app(Settings(db_dsn="sqlite://", seed=11, api_key=None))
    with TestClient(app) as c:
        yield c


def test_submit_resolve_and_history(client):
    r = client.post("/observations", json=body([4, 7, 1, 9, 3], "1001"))
    assert r.status_code == 200
    first = r.json()
    assert first["duplicate"] is False and first["logged"] is True and first["resolved"] is None
    assert first["prediction"]["period_id"] == "1002"
    assert first["prediction"]["label"] in ("High", "Low")

    r = client.post("/observations", json=body([8, 4, 7, 1, 9, 3], "1002"))
    out = r.json()
    assert out["resolved"]["actual_label"] == "High" and out["resolved"]["actual_value"] == 8
    assert out["resolved"]["correct"] == (first["prediction"]["label"] == "High")

    rows = client.get("/history", params={"limit": 10}).json()
    assert len(rows) == 2 and rows[0]["correct"] is None

    summary = client.get("/summary").json()
    assert summary["total"] == 1


def test_duplicate_poll(client):
    client.post("/observations", json=body([4, 7, 1], "7"))
    r = client.post("/observations", json=body([4, 7, 1], "7"))
    assert r.json() == {"duplicate": True, "logged": False, "prediction": None, "resolved": None}
    assert client.get("/stats").json()["total"] == 1


def test_stats_and_patterns(client):
    client.post("/observations", json=body([9, 8, 7, 1, 2, 9, 8], "5"))
    s = client.get("/stats").json()
    assert s["total"] == 1 and s["regime"] == "smart" and 0 <= s["confidence"] <= 100
    assert s["moving_averages"][1] is None
    p = client.get("/patterns").json()
    assert p["window"] == "HHHLLHH"
    assert p["matches"][0]["pattern"] == ["High", "High"]


def test_rejects_bad_input(client):
    assert client.post("/observations", json=body([10], "1")).status_code == 422
    assert client.post("/observations", json={"observations": []}).status_code == 422
    assert client.post("/observations", json=body([3], "bad id")).status_code == 400


def test_api_key():
    app = create_app(Settings(db_dsn="sqlite://", api_key="secret"))
    with TestClient(app) as c:
        assert c.post("/observations", json=body([3], "1")).status_code == 401
        r = c.post("/observations", json=body([3], "1"), headers={"X-API-Key": "secret"})
        assert r.status_code == 200


@pytest.mark.parametrize("path", ["/stats", "/patterns"])
def test_reads_wait_for_running_cycle(client, path):
    client.post("/observations", json=body([9, 8, 7, 1, 2], "1"))
    lock = client.app.state.lock
    results = []
    lock.acquire()
    try:
        t = threading.Thread(target=lambda: results.append(client.get(path)))
        t.start()
        t.join(timeout=0.3)
        # still blocked behind the in-flight cycle
        assert t.is_alive() and not results
    finally:
        lock.release()
    t.join(timeout=5)
    assert results[0].status_code == 200
