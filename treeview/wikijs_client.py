import asyncio
from dataclasses import dataclass

import httpx

from .core.settings import get_settings
from .models import PageMeta

QUERY_LIST = """
query ($locale: String!) {
  pages {
    list(orderBy: PATH, locale: $locale) {
      id path locale title description isPublished isPrivate createdAt updatedAt tags
    }
  }
}
"""


class WikiError(Exception):
    def __init__(self, status: int, message: str):
        super().__init__(message)
        self.status = status
        self.message = message


def page_meta_from_item(item: dict) -> PageMeta:
    # Wiki.js' own title is kept as pageTitle; a node's title is its last path segment.
    return PageMeta(
        name=(item.get("path") or "").strip("/"),
        tags=[str(tag) for tag in item.get("tags") or [] if tag],
        id=int(item["id"]),
        locale=item.get("locale") or "",
        pageTitle=item.get("title") or "",
        description=item.get("description") or "",
        isPublished=item.get("isPublished"),
        isPrivate=item.get("isPrivate"),
        createdAt=item.get("createdAt") or "",
        updatedAt=item.get("updatedAt") or "",
    )


@dataclass
class WikiJSClient:
    base_url: str
    token: str
    timeout_s: int = 10
    locale: str = "en"

    @classmethod
    def from_env(cls):
        settings = get_settings()
        if settings.missing_wikijs_vars():
            raise WikiError(503, "Wiki.js env not configured")
        return cls(settings.wikijs_base_url, settings.wikijs_api_token, locale=settings.wikijs_locale)

    @property
    def graphql_url(self) -> str:
        return f"{self.base_url}/graphql"

    async def _gql(self, query: str, variables: dict | None = None) -> dict:
        headers = {
            "Authorization": f"Bearer {self.token}",
            "Content-Type": "application/json",
        }
        payload = {"query": query}
        if variables:
            payload["variables"] = variables

        # retry network errors with backoff
        for attempt in range(4):
            try:
                async with httpx.AsyncClient(timeout=self.timeout_s) as client:
                    resp = await client.post(self.graphql_url, json=payload, headers=headers)
                # GraphQL always returns 200 for app-level errors; inspect body
                data = resp.json()
                if "errors" in data and data["errors"]:
                    msg = data["errors"][0].get("message", "GraphQL error")
                    raise WikiError(502, f"Wiki.js GraphQL error: {msg}")
                return data["data"]
            except httpx.RequestError as e:
                if attempt == 3:
                    raise WikiError(504, f"Network error talking to Wiki.js: {e}") from e
                await asyncio.sleep(0.5 * (2 ** attempt))

    async def list_pages(self) -> list[PageMeta]:
        data = await self._gql(QUERY_LIST, {"locale": self.locale})
        items = (data.get("pages") or {}).get("list") or []
        return [page_meta_from_item(item) for item in items]
