import pytest
import requests
from hilo.cli import main as cli
from hilo.config import Settings
from hilo.core.errors import FeedError
from hilo.feed import fetch_observations, parse_draws


class FakeResponse:
    def __init__(self, payload, status=200):
        self.payload, self.status = payload, status

    def raise_for_status(self):
        if self.status >= 400:
            raise requests.HTTPError(f"{self.status}")

    def json(self):
        return self.payload


class FakeSession:
    def __init__(self, response):
        self.response = response
        self.calls = []

    def post(self, url, json=None, timeout=None):
        self.calls.append((url, json))
        return self.response


CFG = Settings(feed_url="http://feed.test/list", feed_type_id=1, feed_page_size=10)


def test_parse_draws_skips_malformed():
    draws = parse_draws({"data": {"list": [
        {"number": "7", "issueNumber": "202401010042"},
        {"number": "x", "issueNumber": "202401010041"},
        {"number": 12, "issueNumber": "202401010040"},
        {"number": 3, "issueNumber": 202401010039},
    ]}})
    assert [(d.value, d.period_id) for d in draws] == [(7, "202401010042"), (3, "202401010039")]


def test_fetch_posts_signed_payload():
    http = FakeSession(FakeResponse({"data": {"list": [{"number": "5", "issueNumber": "9"}]}}))
    draws = fetch_observations(CFG, session=http)
    assert draws[0].value == 5
    url, payload = http.calls[0]
    assert url == "http://feed.test/list"
    assert payload["pageSize"] == 10 and payload["typeId"] == 1 and payload["pageNo"] == 1


@pytest.mark.parametrize("response", [
    FakeResponse({}, status=500),
    FakeResponse({"data": {"list": []}}),
    FakeResponse(None),
])
def test_fetch_failures(response):
    with pytest.raises(FeedError):
        fetch_observations(CFG, session=FakeSession(response))


def test_fetch_needs_url():
    with pytest.raises(FeedError):
        fetch_observations(Settings(feed_url=None))


def test_poll_skips_cycle_on_feed_error(monkeypatch):
    def boom(cfg):
        raise FeedError("down")
    monkeypatch.setattr(cli, "fetch_observations", boom)
    monkeypatch.setattr(cli, "_post_observations", lambda obs: pytest.fail("must not submit"))
    assert cli.poll_once() is None


def test_poll_submits_draws(monkeypatch):
    sent = []
    draws = parse_draws({"data": {"list": [{"number": "8", "issueNumber": "3"}, {"number": "1", "issueNumber": "2"}]}})
    monkeypatch.setattr(cli, "fetch_observations", lambda cfg: draws)
    monkeypatch.setattr(cli, "_post_observations", lambda obs: sent.append(obs) or {"duplicate": True})
    assert cli.poll_once() == {"duplicate": True}
    assert sent[0] == [{"value": 8, "period_id": "3"}, {"value": 1, "period_id": "2"}]
