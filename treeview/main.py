from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from treeview.core.errors import APIError
from treeview.log_utils import inject_request_id, setup_logging
from treeview.models import ErrorResponse
from treeview.routers.api import api_router


load_dotenv()

app = FastAPI(title="Wiki Page Tree", version="0.1.0")
setup_logging()


@app.middleware("http")
async def add_req_id(request, call_next):
    return await inject_request_id(request, call_next)


@app.exception_handler(APIError)
async def api_error_handler(request: Request, exc: APIError):
    body = ErrorResponse(code=exc.code, message=exc.message, details=exc.details)
    return JSONResponse(status_code=exc.status_code, content=body.model_dump())


app.include_router(api_router)
