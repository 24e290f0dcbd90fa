import json
import logging
import time
import uuid

from starlette.requests import Request
from starlette.responses import Response

from treeview.core.settings import get_settings

logger = logging.getLogger("treeview.access")


def setup_logging():
    logging.basicConfig(level=get_settings().log_level)


def access_entry(request: Request, response: Response, req_id: str, elapsed_s: float) -> dict:
    entry = {
        "msg": "request",
        "req_id": req_id,
        "method": request.method,
        "path": request.url.path,
        "status": response.status_code,
        "duration_ms": round(elapsed_s * 1000, 1),
    }
    # tree routes are keyed by the page being viewed
    current_page = request.query_params.get("current_page")
    if current_page is not None:
        entry["current_page"] = current_page
    return entry


async def inject_request_id(request: Request, call_next):
    req_id = request.headers.get("X-Request-Id", str(uuid.uuid4()))
    request.state.req_id = req_id
    started = time.perf_counter()
    response: Response = await call_next(request)
    response.headers["X-Request-Id"] = req_id
    entry = access_entry(request, response, req_id, time.perf_counter() - started)
    level = logging.WARNING if response.status_code >= 500 else logging.INFO
    logger.log(level, json.dumps(entry))
    return response
