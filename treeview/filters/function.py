from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable, Sequence
from typing import Union

from treeview.core.errors import ExclusionError
from treeview.models import FunctionExclusion, PageMeta

PagePredicate = Callable[[PageMeta], Union[bool, Awaitable[bool]]]


class FunctionRegistry:
    """Named page predicates that ``external-predicate`` exclusions refer to."""

    def __init__(self) -> None:
        self._functions: dict[str, PagePredicate] = {}

    def add(self, name: str, func: PagePredicate) -> None:
        self._functions[name] = func

    def register(self, name: str) -> Callable[[PagePredicate], PagePredicate]:
        def _decorator(func: PagePredicate) -> PagePredicate:
            self.add(name, func)
            return func

        return _decorator

    def get(self, name: str) -> PagePredicate:
        try:
            return self._functions[name]
        except KeyError:
            raise ExclusionError(f"Unknown exclusion function {name!r}") from None

    def names(self) -> list[str]:
        return sorted(self._functions)


default_registry = FunctionRegistry()


@default_registry.register("is-private")
def is_private(page: PageMeta) -> bool:
    return bool(page.attr("isPrivate"))


@default_registry.register("is-unpublished")
def is_unpublished(page: PageMeta) -> bool:
    return page.attr("isPublished") is False


async def filter_pages_by_function(
    pages: Sequence[PageMeta],
    exclusion: FunctionExclusion,
    registry: FunctionRegistry | None = None,
) -> list[PageMeta]:
    func = (registry or default_registry).get(exclusion.name)
    kept: list[PageMeta] = []
    # one call at a time, in page order
    for page in pages:
        result = func(page)
        if inspect.isawaitable(result):
            result = await result
        if bool(result) == exclusion.negate:
            kept.append(page)
    return kept
