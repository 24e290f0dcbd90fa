from __future__ import annotations

import logging
import secrets
from typing import Annotated

from fastapi import Request, Security
from fastapi.security import APIKeyHeader

from treeview.core.errors import APIError
from treeview.core.settings import get_settings

logger = logging.getLogger("treeview.auth")

api_key_header = APIKeyHeader(name="X-API-Key", auto_error=False)


async def require_api_key(
    request: Request,
    x_api_key: Annotated[str | None, Security(api_key_header)],
) -> None:
    """Guard the tree routes when TREEVIEW_API_KEY is configured."""
    expected = get_settings().api_key
    if not expected:
        return
    if x_api_key is None or not secrets.compare_digest(x_api_key, expected):
        logger.warning(
            "rejected %s %s: %s",
            request.method,
            request.url.path,
            "missing API key" if x_api_key is None else "wrong API key",
        )
        raise APIError(status_code=401, code="unauthorized", message="Invalid API key")
