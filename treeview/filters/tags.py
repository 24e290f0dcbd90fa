from __future__ import annotations

from collections.abc import Sequence

from treeview.models import PageMeta, TagsExclusion


def normalize_tag(raw: str) -> str:
    return raw.strip().lstrip("#")


def filter_pages_by_tags(pages: Sequence[PageMeta], exclusion: TagsExclusion) -> list[PageMeta]:
    excluded = {normalize_tag(tag) for tag in exclusion.tags if normalize_tag(tag)}
    kept: list[PageMeta] = []
    for page in pages:
        tagged = any(normalize_tag(tag) in excluded for tag in page.tags)
        if tagged == exclusion.negate:
            kept.append(page)
    return kept
