from __future__ import annotations

import json

from pydantic import ValidationError

from treeview.core.errors import ConfigError
from treeview.core.settings import get_settings
from treeview.models import TreeViewConfig


def parse_exclusions(raw: str | None) -> list:
    if raw is None or not raw.strip():
        return []
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigError(f"TREEVIEW_EXCLUSIONS is not valid JSON: {e}") from e
    if not isinstance(parsed, list):
        raise ConfigError("TREEVIEW_EXCLUSIONS must be a JSON list")
    return parsed


def load_config() -> TreeViewConfig:
    """Build the exclusion config from TREEVIEW_* environment variables."""
    settings = get_settings()
    exclusions = parse_exclusions(settings.exclusions)
    page_exclude_regex = settings.page_exclude_regex
    try:
        return TreeViewConfig(page_exclude_regex=page_exclude_regex, exclusions=exclusions)
    except ValidationError as e:
        raise ConfigError(f"Invalid exclusions config: {e}") from e
