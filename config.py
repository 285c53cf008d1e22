import logging
import os
from dataclasses import dataclass
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv


@dataclass(frozen=True)
class Settings:
    """Limits and sampling sizes for the dashboard views."""

    top_content_limit: int = 5
    hashtag_limit: int = 8
    feed_limit: int = 8
    feed_mention_sample: int = 3
    feed_message_sample: int = 2
    timezone: Optional[str] = None  # None means host local time
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        for name in ("top_content_limit", "hashtag_limit", "feed_limit",
                     "feed_mention_sample", "feed_message_sample"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative")
        if self.timezone:
            try:
                ZoneInfo(self.timezone)
            except (ZoneInfoNotFoundError, ValueError) as e:
                raise ValueError(f"Unknown timezone: {self.timezone}") from e
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ValueError(f"Unknown log level: {self.log_level}")

    @property
    def tzinfo(self) -> Optional[ZoneInfo]:
        return ZoneInfo(self.timezone) if self.timezone else None


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError as e:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from e


def get_settings() -> Settings:
    load_dotenv()
    return Settings(
        top_content_limit=_int_env("ANALYTICS_TOP_CONTENT_LIMIT", 5),
        hashtag_limit=_int_env("ANALYTICS_HASHTAG_LIMIT", 8),
        feed_limit=_int_env("ANALYTICS_FEED_LIMIT", 8),
        feed_mention_sample=_int_env("ANALYTICS_FEED_MENTION_SAMPLE", 3),
        feed_message_sample=_int_env("ANALYTICS_FEED_MESSAGE_SAMPLE", 2),
        timezone=(os.getenv("ANALYTICS_TIMEZONE") or "").strip() or None,
        log_level=(os.getenv("LOG_LEVEL") or "INFO").strip().upper(),
    )
