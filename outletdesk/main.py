import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.routing import Mount

from outletdesk.auth import _get_session_store, router as auth_router
from outletdesk.config import get_settings
from outletdesk.exceptions import (
    AuthenticationError,
    IntegrationError,
    InvalidInputError,
    NotFoundError,
    PermissionDeniedError,
    RateLimitError,
    UploadError,
)
from outletdesk.mcp_server import mcp
from outletdesk.routers.forms import router as forms_router
from outletdesk.routers.outlets import router as outlets_router
from outletdesk.routers.products import router as products_router
from outletdesk.routers.reviews import router as reviews_router
from outletdesk.routers.uploads import router as uploads_router
from outletdesk.routers.users import router as users_router

logger = logging.getLogger(__name__)


# --- Localhost-only middleware ---

class LocalhostOnlyMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        client_host = request.client.host if request.client else None
        if client_host not in ("127.0.0.1", "::1", "localhost"):
            return JSONResponse(
                status_code=403,
                content={"error_code": "forbidden", "message": "Localhost access only"},
            )
        return await call_next(request)


# --- FastAPI app ---

api = FastAPI(title="Outletdesk", version="0.1.0")
api.include_router(auth_router)
api.include_router(forms_router)
api.include_router(outlets_router)
api.include_router(reviews_router)
api.include_router(products_router)
api.include_router(users_router)
api.include_router(uploads_router)


@api.get("/api/status")
def api_status() -> dict:
    accounts = _get_session_store().list_accounts()
    return {"signed_in_accounts": accounts, "ready": len(accounts) > 0}


# --- Exception handlers ---

def _error(status_code: int, error_code: str, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error_code": error_code, "message": str(exc)})


@api.exception_handler(PermissionDeniedError)
async def permission_error_handler(request: Request, exc: PermissionDeniedError):
    return _error(403, "permission_denied", exc)


@api.exception_handler(AuthenticationError)
async def auth_error_handler(request: Request, exc: AuthenticationError):
    return _error(401, "auth_error", exc)


@api.exception_handler(InvalidInputError)
async def invalid_input_error_handler(request: Request, exc: InvalidInputError):
    return _error(422, "invalid_input", exc)


@api.exception_handler(NotFoundError)
async def not_found_error_handler(request: Request, exc: NotFoundError):
    return _error(404, "not_found", exc)


@api.exception_handler(RateLimitError)
async def rate_limit_error_handler(request: Request, exc: RateLimitError):
    return _error(429, "rate_limit", exc)


@api.exception_handler(UploadError)
async def upload_error_handler(request: Request, exc: UploadError):
    return _error(502, "upload_error", exc)


@api.exception_handler(IntegrationError)
async def integration_error_handler(request: Request, exc: IntegrationError):
    logger.error("Backend call failed on %s %s: %s", request.method, request.url.path, exc)
    return _error(500, "integration_error", exc)


# --- Starlette root app ---

mcp_app = mcp.http_app(path="/", stateless_http=True)

app = Starlette(
    middleware=[Middleware(LocalhostOnlyMiddleware)],
    routes=[
        Mount("/mcp", app=mcp_app),
        Mount("/", app=api),
    ],
    lifespan=mcp_app.lifespan,
)


def run():
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(
        "outletdesk.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
