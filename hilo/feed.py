"""Client for the upstream draw feed.

The feed answers a signed POST with the latest draws, newest first::

    {"data": {"list": [{"number": "7", "issueNumber": "20240101042"}, ...]}}
"""
import time

import requests

from hilo.api.schemas import ObservationIn
from hilo.config import Settings
from hilo.core.errors import FeedError
from hilo.core.log import get_logger
from hilo.core.validation import is_valid_sample

logger = get_logger(__name__)


def build_payload(cfg: Settings) -> dict:
    return {
        "pageSize": cfg.feed_page_size,
        "pageNo": 1,
        "typeId": cfg.feed_type_id,
        "language": 0,
        "random": cfg.feed_random,
        "signature": cfg.feed_signature,
        "timestamp": int(time.time()),
    }


def parse_draws(body: dict) -> list[ObservationIn]:
    items = ((body or {}).get("data") or {}).get("list") or []
    out = []
    for item in items:
        try:
            value = int(item.get("number"))
        except (TypeError, ValueError):
            logger.warning("skipping malformed draw", item=item)
            continue
        if not is_valid_sample(value):
            logger.warning("skipping out-of-range draw", value=value)
            continue
        pid = item.get("issueNumber")
        out.append(ObservationIn(value=value, period_id=str(pid) if pid is not None else None))
    return out


def fetch_observations(cfg: Settings, session: requests.Session | None = None) -> list[ObservationIn]:
    """Latest draws, newest first. Raises FeedError when nothing usable comes back."""
    if not cfg.feed_url:
        raise FeedError("FEED_URL is not configured")
    http = session or requests
    try:
        r = http.post(cfg.feed_url, json=build_payload(cfg), timeout=cfg.feed_timeout)
        r.raise_for_status()
        body = r.json()
    except requests.RequestException as e:
        raise FeedError(f"feed request failed: {e}") from e
    except ValueError as e:
        raise FeedError("feed returned invalid JSON") from e
    draws = parse_draws(body)
    if not draws:
        raise FeedError("feed returned no draws")
    return draws
