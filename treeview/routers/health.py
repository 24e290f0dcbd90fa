from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from treeview.core.config import load_config
from treeview.core.errors import ConfigError
from treeview.core.settings import get_settings
from treeview.models import HealthResponse, ReadyResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(ok=True)


@router.get(
    "/ready",
    response_model=ReadyResponse,
    responses={503: {"model": ReadyResponse, "description": "Missing Wiki.js env vars or bad exclusions"}},
)
async def ready():
    problems = [f"{var} missing" for var in get_settings().missing_wikijs_vars()]
    try:
        load_config()
    except ConfigError as e:
        problems.append(str(e))

    if problems:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=ReadyResponse(ready=False, reason="; ".join(problems)).model_dump(),
        )
    return ReadyResponse(ready=True)
