from __future__ import annotations

import logging
from collections.abc import Sequence

from treeview.filters.function import FunctionRegistry, filter_pages_by_function
from treeview.filters.regex import filter_pages_by_regex
from treeview.filters.tags import filter_pages_by_tags
from treeview.models import (
    Exclusion,
    FunctionExclusion,
    PageMeta,
    RegexExclusion,
    TagsExclusion,
    TreeViewConfig,
)

PLUG_DISPLAY_NAME = "TreeView"

logger = logging.getLogger("treeview.filters")

_deprecation_warned = False


def deprecation_message(rule: str) -> str:
    return (
        f"{PLUG_DISPLAY_NAME}:\n"
        "`pageExcludeRegex` setting is deprecated. Please use `exclusions`:\n\n"
        "```yaml\n"
        "treeview:\n"
        "  exclusions:\n"
        "  - type: regex\n"
        f'    rule: "{rule}"\n'
        "```\n"
    )


def warn_page_exclude_regex(rule: str) -> None:
    global _deprecation_warned
    if _deprecation_warned:
        return
    _deprecation_warned = True
    logger.warning(deprecation_message(rule))


def exclusion_stages(config: TreeViewConfig) -> list[Exclusion]:
    stages: list[Exclusion] = list(config.exclusions)
    if config.page_exclude_regex:
        warn_page_exclude_regex(config.page_exclude_regex)
        stages.insert(0, RegexExclusion(rule=config.page_exclude_regex, negate=False))
    return stages


async def apply_exclusion(
    pages: Sequence[PageMeta],
    exclusion: Exclusion,
    registry: FunctionRegistry | None = None,
) -> list[PageMeta]:
    if isinstance(exclusion, RegexExclusion):
        return filter_pages_by_regex(pages, exclusion)
    if isinstance(exclusion, TagsExclusion):
        return filter_pages_by_tags(pages, exclusion)
    if isinstance(exclusion, FunctionExclusion):
        return await filter_pages_by_function(pages, exclusion, registry)
    raise TypeError(f"unsupported exclusion: {exclusion!r}")


async def apply_exclusions(
    pages: Sequence[PageMeta],
    config: TreeViewConfig,
    registry: FunctionRegistry | None = None,
) -> list[PageMeta]:
    """Run every exclusion stage in order, each one narrowing the previous output."""
    result = list(pages)
    for exclusion in exclusion_stages(config):
        before = len(result)
        result = await apply_exclusion(result, exclusion, registry)
        logger.debug("exclusion %s dropped %d of %d pages", exclusion.type, before - len(result), before)
    return result
