from fastapi import APIRouter, Depends, Query
from fastapi.responses import PlainTextResponse

from treeview.core.auth import require_api_key
from treeview.core.services.tree_service import page_tree_for_request
from treeview.models import ErrorResponse, PageTreeResponse, TreeRequest
from treeview.page_tree import render_tree_text

router = APIRouter(
    prefix="/tree",
    tags=["tree"],
    dependencies=[Depends(require_api_key)],
)

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
    422: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
    502: {"model": ErrorResponse},
    503: {"model": ErrorResponse},
    504: {"model": ErrorResponse},
}


@router.get("", response_model=PageTreeResponse, responses=ERROR_RESPONSES)
async def get_tree(
    current_page: str = Query("", description="Page the tree is centered on"),
) -> PageTreeResponse:
    return await page_tree_for_request(current_page)


@router.post("", response_model=PageTreeResponse, responses=ERROR_RESPONSES)
async def post_tree(payload: TreeRequest) -> PageTreeResponse:
    return await page_tree_for_request(payload.current_page, payload.config)


@router.get("/text", response_class=PlainTextResponse, responses=ERROR_RESPONSES)
async def get_tree_text(
    current_page: str = Query("", description="Page to mark with '*'"),
) -> str:
    tree = await page_tree_for_request(current_page)
    return render_tree_text(tree.nodes)
