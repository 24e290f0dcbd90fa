from __future__ import annotations

from collections.abc import Iterable, Sequence
from functools import lru_cache

import pyuca

from treeview.core.errors import DuplicatePageError, MalformedPageNameError
from treeview.models import FolderData, PageData, PageMeta, TreeNode, TreeShortcutPages

PATH_SEPARATOR = "/"


def split_page_name(name: str) -> list[str]:
    parts = name.split(PATH_SEPARATOR)
    if not all(parts):
        raise MalformedPageNameError(name)
    return parts


@lru_cache(maxsize=1)
def _collator() -> pyuca.Collator:
    # Loading the Unicode collation table is slow; build it once.
    return pyuca.Collator()


def locale_sort_key(name: str) -> tuple[int, ...]:
    return _collator().sort_key(name)


def sort_pages(pages: Iterable[PageMeta]) -> list[PageMeta]:
    """Sort pages by name with the Unicode collation algorithm (root locale)."""
    return sorted(pages, key=lambda page: locale_sort_key(page.name))


def clamp(val: int, low: int, high: int) -> int:
    if val < low:
        return low
    elif val > high:
        return high
    return val


def find_tree_shortcut_pages(pages: Sequence[PageMeta], current_page: str) -> TreeShortcutPages:
    """Find the pages the previous/next keyboard shortcuts point to.

    A current page missing from ``pages`` is located at index -1, so both
    shortcuts clamp to the first page.
    """
    if not pages:
        raise ValueError("at least one page is required to compute shortcuts")
    index = next((i for i, page in enumerate(pages) if page.name == current_page), -1)
    last = len(pages) - 1
    return TreeShortcutPages(
        prev_page=pages[clamp(index - 1, 0, last)].name,
        next_page=pages[clamp(index + 1, 0, last)].name,
    )


def _page_data(page: PageMeta, title: str, current_page: str | None) -> PageData:
    attrs = page.model_dump()
    for key in ("title", "is_current_page", "node_type"):
        attrs.pop(key, None)
    # Computed values go in under their aliases so they win over record attributes.
    return PageData.model_validate(
        {**attrs, "title": title, "isCurrentPage": page.name == current_page, "nodeType": "page"}
    )


def _find_child(nodes: list[TreeNode], title: str) -> TreeNode | None:
    return next((node for node in nodes if node.data.title == title), None)


def build_tree(pages: Iterable[PageMeta], current_page: str | None = None) -> list[TreeNode]:
    """Fold page names into a list of top-level tree nodes.

    Intermediate path segments become folder nodes. A folder is promoted to a
    page in place (same position, same children) once a page with its exact
    name is seen; pages are never demoted. Children keep insertion order, so
    pass the pages already sorted.
    """
    root: list[TreeNode] = []
    for page in pages:
        parts = split_page_name(page.name)
        siblings = root
        for index, title in enumerate(parts):
            is_leaf = index == len(parts) - 1
            node = _find_child(siblings, title)
            if node is None:
                if is_leaf:
                    data = _page_data(page, title, current_page)
                else:
                    name = PATH_SEPARATOR.join(parts[: index + 1])
                    data = FolderData(name=name, title=title, is_current_page=name == current_page)
                node = TreeNode(data=data)
                siblings.append(node)
            elif is_leaf:
                if node.data.node_type == "page":
                    raise DuplicatePageError(page.name)
                node.data = _page_data(page, title, current_page)
            siblings = node.nodes
    return root


def render_tree_text(nodes: list[TreeNode]) -> str:
    lines = ["."]

    def _walk(children: list[TreeNode], prefix: str) -> None:
        for idx, node in enumerate(children):
            is_last = idx == len(children) - 1
            branch = "`-- " if is_last else "|-- "
            label = node.data.title
            if node.data.node_type == "folder":
                label += PATH_SEPARATOR
            if node.data.is_current_page:
                label += " *"
            lines.append(f"{prefix}{branch}{label}")
            child_prefix = f"{prefix}{'    ' if is_last else '|   '}"
            _walk(node.nodes, child_prefix)

    _walk(nodes, "")
    return "\n".join(lines)
