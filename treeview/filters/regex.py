from __future__ import annotations

import re
from collections.abc import Sequence

from treeview.core.errors import ExclusionError
from treeview.models import PageMeta, RegexExclusion


def compile_rule(rule: str) -> re.Pattern[str]:
    try:
        return re.compile(rule)
    except re.error as e:
        raise ExclusionError(f"Invalid exclusion regex {rule!r}: {e}") from e


def filter_pages_by_regex(pages: Sequence[PageMeta], exclusion: RegexExclusion) -> list[PageMeta]:
    """Drop pages whose name matches ``rule``; ``negate`` keeps only the matches."""
    pattern = compile_rule(exclusion.rule)
    return [page for page in pages if bool(pattern.search(page.name)) == exclusion.negate]
