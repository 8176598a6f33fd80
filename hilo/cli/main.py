import time
import typer
import requests
from hilo.config import settings
from hilo.core.errors import FeedError
from hilo.core.log import get_logger, setup_logging
from hilo.feed import fetch_observations


app = typer.Typer()
logger = get_logger(__name__)


def _headers():
    h = {}
    if settings.api_key:
        h["X-API-Key"] = settings.api_key
    return h


def _post_observations(observations: list[dict]) -> dict:
    r = requests.post(f"{settings.api_base}/observations", json={"observations": observations},
                      headers=_headers(), timeout=settings.feed_timeout)
    r.raise_for_status()
    return r.json()


@app.command()
def submit(values: list[int], period_id: str = typer.Option(None, help="period id of the newest value")):
    """Submit values, newest first."""
    obs = [{"value": v} for v in values]
    obs[0]["period_id"] = period_id
    typer.echo(_post_observations(obs))


@app.command()
def stats():
    r = requests.get(f"{settings.api_base}/stats", headers=_headers())
    typer.echo(r.json())


@app.command()
def patterns(limit: int = 10):
    r = requests.get(f"{settings.api_base}/patterns", params={"limit": limit}, headers=_headers())
    typer.echo(r.json())


@app.command()
def history(limit: int = typer.Option(None, help="defaults to HISTORY_LENGTH")):
    r = requests.get(f"{settings.api_base}/history", params={"limit": limit or settings.history_length},
                     headers=_headers())
    for row in r.json():
        typer.echo(row)


def poll_once() -> dict | None:
    """One cycle: fetch the feed and submit it. None when the cycle was skipped."""
    try:
        draws = fetch_observations(settings)
    except FeedError as e:
        logger.warning("feed unavailable, skipping cycle", error=str(e))
        return None
    try:
        return _post_observations([d.model_dump() for d in draws])
    except requests.RequestException as e:
        logger.error("submit failed, skipping cycle", error=str(e))
        return None


@app.command()
def poll(interval: int = typer.Option(None, help="seconds between polls, defaults to REFRESH_INTERVAL"),
         once: bool = typer.Option(False, help="run a single cycle and exit")):
    """Fetch the feed on a fixed interval and submit every new draw."""
    setup_logging(settings.log_level, structured=settings.log_json)
    wait = interval or settings.refresh_interval
    while True:
        out = poll_once()
        if out and not out["duplicate"]:
            p = out["prediction"]
            typer.echo(f"{p['period_id'] or '-'}: {p['label']} ({p['synthetic_value']}) [{p['regime']}]")
        if once:
            break
        time.sleep(wait)


if __name__ == "__main__":
    app()
