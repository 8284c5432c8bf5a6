from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ..exceptions.store_exceptions import StoreError
from ..common.log import log_api_error_response, log_unexpected_error


def register_error_handlers(app: FastAPI) -> None:
    """
    Turn every failure into a status code and a `{"error", "detail"}` body.

    Must run before CORSMiddleware is added: the catch-all is a middleware and
    has to sit inside the CORS layer so 500 responses carry its headers too.
    """

    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError):
        log_api_error_response(request.url.path, exc.status_code, exc.message)
        return JSONResponse(status_code=exc.status_code, content=exc.to_response())

    @app.middleware("http")
    async def catch_unexpected_errors(request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as e:
            # never leak internals to the client
            log_unexpected_error(f"{request.method} {request.url.path}", str(e))
            return JSONResponse(
                status_code=500,
                content={"error": "internal_error", "detail": "Internal server error"},
            )
