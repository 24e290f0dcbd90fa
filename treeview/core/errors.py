from __future__ import annotations

from typing import Any


class APIError(Exception):
    def __init__(
        self,
        status_code: int,
        code: str,
        message: str,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.code = code
        self.message = message
        self.details = details


class TreeViewError(Exception):
    """Base class for failures while building a page tree."""


class MalformedPageNameError(TreeViewError):
    def __init__(self, name: str):
        super().__init__(f"Malformed page name {name!r}: empty path segment")
        self.name = name


class DuplicatePageError(TreeViewError):
    def __init__(self, name: str):
        super().__init__(f"Duplicate page name {name!r}")
        self.name = name


class ExclusionError(TreeViewError):
    pass


class ConfigError(TreeViewError):
    pass
