from __future__ import annotations

import logging
import os
from dataclasses import dataclass


def parse_log_level(raw: str | None) -> int:
    level = getattr(logging, (raw or "").strip().upper(), None)
    return level if isinstance(level, int) else logging.INFO


@dataclass(frozen=True)
class Settings:
    """Environment-driven settings, read fresh on every call to ``get_settings``."""

    wikijs_base_url: str = ""
    wikijs_api_token: str = ""
    wikijs_locale: str = "en"
    api_key: str = ""
    log_level: int = logging.INFO
    exclusions: str | None = None
    page_exclude_regex: str | None = None

    def missing_wikijs_vars(self) -> list[str]:
        missing = []
        if not self.wikijs_base_url:
            missing.append("WIKIJS_BASE_URL")
        if not self.wikijs_api_token:
            missing.append("WIKIJS_API_TOKEN")
        return missing


def get_settings() -> Settings:
    return Settings(
        wikijs_base_url=os.getenv("WIKIJS_BASE_URL", "").rstrip("/"),
        wikijs_api_token=os.getenv("WIKIJS_API_TOKEN", ""),
        wikijs_locale=os.getenv("WIKIJS_LOCALE", "en"),
        api_key=os.getenv("TREEVIEW_API_KEY", ""),
        log_level=parse_log_level(os.getenv("TREEVIEW_LOG_LEVEL")),
        exclusions=os.getenv("TREEVIEW_EXCLUSIONS"),
        page_exclude_regex=os.getenv("TREEVIEW_PAGE_EXCLUDE_REGEX") or None,
    )
