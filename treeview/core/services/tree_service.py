from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

from treeview.core.config import load_config
from treeview.core.errors import (
    APIError,
    ConfigError,
    DuplicatePageError,
    ExclusionError,
    MalformedPageNameError,
)
from treeview.core.wikijs_client import WikiError, WikiJSClient, map_wiki_error
from treeview.filters import FunctionRegistry, apply_exclusions
from treeview.models import PageMeta, PageTreeResponse, TreeViewConfig
from treeview.page_tree import build_tree, find_tree_shortcut_pages, sort_pages

logger = logging.getLogger("treeview.tree")


class PageSource(Protocol):
    async def get_current_page(self) -> str: ...

    async def list_pages(self) -> list[PageMeta]: ...


@dataclass
class WikiPageSource:
    """Pages from Wiki.js; the current page is whatever the caller is viewing."""

    current_page: str
    client: WikiJSClient

    async def get_current_page(self) -> str:
        return self.current_page.strip("/")

    async def list_pages(self) -> list[PageMeta]:
        return await self.client.list_pages()


async def get_page_tree(
    source: PageSource,
    config: TreeViewConfig,
    registry: FunctionRegistry | None = None,
) -> PageTreeResponse:
    current_page = await source.get_current_page()
    pages = await source.list_pages()
    total = len(pages)

    pages = await apply_exclusions(pages, config, registry)
    pages = sort_pages(pages)

    shortcuts = find_tree_shortcut_pages(pages, current_page) if pages else None
    nodes = build_tree(pages, current_page)
    logger.info(
        "built page tree: %d of %d pages, %d top-level nodes, current=%s",
        len(pages),
        total,
        len(nodes),
        current_page,
    )
    return PageTreeResponse(
        nodes=nodes,
        current_page=current_page,
        tree_shortcut_pages=shortcuts,
    )


async def page_tree_for_request(
    current_page: str,
    config: TreeViewConfig | None = None,
) -> PageTreeResponse:
    try:
        source = WikiPageSource(current_page=current_page, client=WikiJSClient.from_env())
        return await get_page_tree(source, config or load_config())
    except WikiError as e:
        raise map_wiki_error(e).to_api_error()
    except ExclusionError as e:
        raise APIError(400, "bad_exclusion", str(e))
    except (MalformedPageNameError, DuplicatePageError) as e:
        raise APIError(422, "invalid_page_data", str(e), {"page": e.name})
    except ConfigError as e:
        raise APIError(500, "config_error", str(e))
