from treeview.filters.function import FunctionRegistry, default_registry, filter_pages_by_function
from treeview.filters.pipeline import apply_exclusion, apply_exclusions, exclusion_stages
from treeview.filters.regex import filter_pages_by_regex
from treeview.filters.tags import filter_pages_by_tags

__all__ = [
    "FunctionRegistry",
    "default_registry",
    "filter_pages_by_function",
    "apply_exclusion",
    "apply_exclusions",
    "exclusion_stages",
    "filter_pages_by_regex",
    "filter_pages_by_tags",
]
