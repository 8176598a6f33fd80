from pydantic_settings import BaseSettings
import os

class Settings(BaseSettings):
    db_dsn: str = os.getenv("DB_DSN", "sqlite://")
    pattern_window: int = int(os.getenv("PATTERN_WINDOW", 30))
    trend_window: int = int(os.getenv("TREND_WINDOW", 20))
    defensive_streak: int = int(os.getenv("DEFENSIVE_STREAK", 2))
    seed: int | None = int(os.environ["SEED"]) if os.getenv("SEED") else None
    api_key: str | None = os.getenv("API_KEY")
    api_base: str = os.getenv("API_BASE", "http://127.0.0.1:8000")
    # upstream draw feed
    feed_url: str | None = os.getenv("FEED_URL")
    feed_type_id: int = int(os.getenv("FEED_TYPE_ID", 1))
    feed_page_size: int = int(os.getenv("FEED_PAGE_SIZE", 10))
    feed_random: str = os.getenv("FEED_RANDOM", "")
    feed_signature: str = os.getenv("FEED_SIGNATURE", "")
    feed_timeout: float = float(os.getenv("FEED_TIMEOUT", 10))
    refresh_interval: int = int(os.getenv("REFRESH_INTERVAL", 60))
    history_length: int = int(os.getenv("HISTORY_LENGTH", 20))
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_json: bool = os.getenv("LOG_JSON", "0") in ("1", "true", "True")

settings = Settings()
