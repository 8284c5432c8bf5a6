from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from ..common.log import log_api_request

router = APIRouter(tags=["status"])


@router.get("/", response_class = PlainTextResponse)
async def read_root() -> str:
    """Liveness text. Answers even when the database is unreachable."""
    return "coffee server is running"


@router.get("/health")
async def health_check(request: Request):
    """Readiness check: pings the database through the shared gateway."""
    log_api_request("/health", "GET")
    repo = getattr(request.app.state, "repo", None)
    if repo is not None and await repo.ping():
        return {"status": "ok", "database": "connected"}
    return JSONResponse(
        status_code = 503,
        content = {"status": "degraded", "database": "unreachable"},
    )
