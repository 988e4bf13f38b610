from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class FeedHeader(BaseModel):
    key: str
    value: str


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=None, extra="ignore")

    # ──────────────────────────────────────────────────────────────
    # Feed (CAP-NZ RSS or Atom)
    # ──────────────────────────────────────────────────────────────

    rss_url: str = Field(
        default="https://alerts.metservice.com/cap/rss",
        alias="RSS_URL",
    )
    # JSON list: [{"key": "User-Agent", "value": "..."}]
    feed_headers: List[FeedHeader] = Field(default_factory=list, alias="FEED_HEADERS")

    feed_timeout_s: float = Field(default=30.0, alias="FEED_TIMEOUT_S")
    feed_retries: int = Field(default=2, alias="FEED_RETRIES")
    feed_retry_base_s: float = Field(default=1.0, alias="FEED_RETRY_BASE_S")

    # ──────────────────────────────────────────────────────────────
    # Submission sink
    # POST to SUBMIT_URL when set, otherwise write GeoJSON to SUBMIT_PATH.
    # ──────────────────────────────────────────────────────────────

    submit_url: Optional[str] = Field(default=None, alias="SUBMIT_URL")
    submit_path: str = Field(default="capnz_features.geojson", alias="SUBMIT_PATH")

    # ──────────────────────────────────────────────────────────────
    # Rendering
    # ──────────────────────────────────────────────────────────────

    local_timezone: str = Field(default="Pacific/Auckland", alias="CAPNZ_LOCAL_TZ")
    local_timezone_label: str = Field(default="NZT", alias="CAPNZ_LOCAL_TZ_LABEL")

    # Approximate center of New Zealand, used when an alert has no usable area
    fallback_lon: float = Field(default=174.0, alias="CAPNZ_FALLBACK_LON")
    fallback_lat: float = Field(default=-41.0, alias="CAPNZ_FALLBACK_LAT")

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    def header_dict(self) -> dict[str, str]:
        return {h.key: h.value for h in self.feed_headers}


settings = Settings()
