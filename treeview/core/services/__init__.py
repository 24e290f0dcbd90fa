from treeview.core.services.tree_service import (
    PageSource,
    WikiPageSource,
    get_page_tree,
    page_tree_for_request,
)

__all__ = [
    "PageSource",
    "WikiPageSource",
    "get_page_tree",
    "page_tree_for_request",
]
