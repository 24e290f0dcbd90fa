from __future__ import annotations

from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class PageMeta(BaseModel):
    """A page as listed by the wiki. Attributes other than name/tags are opaque."""

    model_config = ConfigDict(extra="allow")

    name: str = Field(..., description="Full page path like 'ai/tools/ollama'")
    tags: list[str] = Field(default_factory=list)

    def attr(self, key: str, default: Any = None) -> Any:
        return (self.model_extra or {}).get(key, default)


class PageData(_CamelModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    name: str
    title: str
    tags: list[str] = Field(default_factory=list)
    is_current_page: bool = Field(False, alias="isCurrentPage")
    node_type: Literal["page"] = Field("page", alias="nodeType")


class FolderData(_CamelModel):
    name: str
    title: str
    is_current_page: bool = Field(False, alias="isCurrentPage")
    node_type: Literal["folder"] = Field("folder", alias="nodeType")


NodeData = Annotated[Union[PageData, FolderData], Field(discriminator="node_type")]


class TreeNode(BaseModel):
    data: NodeData
    nodes: list["TreeNode"] = Field(default_factory=list)


class TreeShortcutPages(_CamelModel):
    prev_page: str = Field(..., alias="prevPage")
    next_page: str = Field(..., alias="nextPage")


class PageTreeResponse(_CamelModel):
    nodes: list[TreeNode]
    current_page: str = Field(..., alias="currentPage")
    tree_shortcut_pages: Optional[TreeShortcutPages] = Field(None, alias="treeShortcutPages")


# Exclusion stages

class RegexExclusion(BaseModel):
    type: Literal["regex"] = "regex"
    rule: str
    negate: bool = False


class TagsExclusion(BaseModel):
    type: Literal["tags"] = "tags"
    tags: list[str]
    negate: bool = False


class FunctionExclusion(BaseModel):
    type: Literal["external-predicate"] = "external-predicate"
    name: str = Field(..., description="Name of a registered predicate function")
    negate: bool = False


Exclusion = Annotated[
    Union[RegexExclusion, TagsExclusion, FunctionExclusion],
    Field(discriminator="type"),
]


class TreeViewConfig(_CamelModel):
    page_exclude_regex: Optional[str] = Field(
        None,
        alias="pageExcludeRegex",
        description="Deprecated: use a regex entry in exclusions",
    )
    exclusions: list[Exclusion] = Field(default_factory=list)


class TreeRequest(_CamelModel):
    current_page: str = Field(..., alias="currentPage")
    config: Optional[TreeViewConfig] = None


class HealthResponse(BaseModel):
    ok: bool


class ReadyResponse(BaseModel):
    ready: bool
    reason: str | None = None


class ErrorResponse(BaseModel):
    code: str
    message: str
    details: dict[str, Any] | None = None
