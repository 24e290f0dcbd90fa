from __future__ import annotations

from dataclasses import dataclass

from treeview.core.errors import APIError
from treeview.wikijs_client import WikiError, WikiJSClient


@dataclass
class UpstreamError(Exception):
    status_code: int
    message: str

    def to_api_error(self) -> APIError:
        return APIError(self.status_code, "upstream_error", self.message)


class UpstreamGraphQLError(UpstreamError):
    pass


class UpstreamNetworkError(UpstreamError):
    pass


class UpstreamUnavailableError(UpstreamError):
    """Wiki.js is not configured for this deployment."""


def map_wiki_error(err: WikiError) -> UpstreamError:
    message = err.message or "Wiki.js upstream error"
    if err.status == 504:
        return UpstreamNetworkError(status_code=504, message=message)
    if err.status == 503:
        return UpstreamUnavailableError(status_code=503, message=message)
    return UpstreamGraphQLError(status_code=502 if err.status >= 500 else err.status, message=message)


__all__ = [
    "WikiJSClient",
    "WikiError",
    "UpstreamError",
    "UpstreamGraphQLError",
    "UpstreamNetworkError",
    "UpstreamUnavailableError",
    "map_wiki_error",
]
