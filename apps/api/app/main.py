"""FastAPI application entrypoint."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.openapi.utils import get_openapi
from fastapi.responses import JSONResponse

from app.adapters.neynar import NeynarClientProvider, NeynarError, NeynarErrorKind
from app.errors import ApiError
from app.routes import internal_router, me_router, users_router
from app.schemas.error import ErrorResponse

logger = logging.getLogger(__name__)

_OPENAPI_RESPONSE_CODES: dict[str, dict[str, set[str]]] = {
    "/api/me": {"get": {"200", "401", "500"}},
    "/api/users/{fid}": {"get": {"200", "400", "401", "404", "429", "500", "502"}},
    "/api/notifications": {"post": {"200", "400", "401", "500", "502"}},
    "/api/casts": {"post": {"204", "400", "401", "500", "502"}},
}

_PAYLOAD_VALIDATION_PATHS: set[tuple[str, str]] = {
    ("POST", "/api/notifications"),
    ("POST", "/api/casts"),
}

_FID_VALIDATION_PATHS: set[tuple[str, str]] = {
    ("GET", "/api/users/{fid}"),
}

_NEYNAR_ERROR_STATUS: dict[NeynarErrorKind, tuple[int, str | None]] = {
    NeynarErrorKind.API_KEY_MISSING: (500, "Internal server error"),
    NeynarErrorKind.USER_NOT_FOUND: (404, "User not found"),
    NeynarErrorKind.NOTIFICATION_FAILED: (502, None),
    NeynarErrorKind.RATE_LIMITED: (429, "Rate limited"),
    NeynarErrorKind.INVALID_FID: (400, "Invalid FID"),
}


def _apply_contract_response_codes(schema: dict) -> None:
    """Limit documented response codes to the ones each route can return."""
    for path, methods in _OPENAPI_RESPONSE_CODES.items():
        path_item = schema.get("paths", {}).get(path)
        if not path_item:
            continue

        for method, allowed_codes in methods.items():
            operation = path_item.get(method)
            if not operation:
                continue

            responses = operation.setdefault("responses", {})
            for status_code in list(responses.keys()):
                if status_code not in allowed_codes:
                    responses.pop(status_code, None)

            for status_code in sorted(allowed_codes):
                responses.setdefault(status_code, {"description": "See API contract"})


def create_app(neynar_provider: NeynarClientProvider | None = None) -> FastAPI:
    app = FastAPI(title="Mini App Identity API", version="0.1.0")
    app.state.neynar_provider = neynar_provider or NeynarClientProvider()

    @app.exception_handler(ApiError)
    async def handle_api_error(_, exc: ApiError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=exc.payload.model_dump(mode="json"))

    @app.exception_handler(NeynarError)
    async def handle_neynar_error(request: Request, exc: NeynarError) -> JSONResponse:
        status_code, public_message = _NEYNAR_ERROR_STATUS[exc.kind]
        log = logger.error if status_code >= 500 else logger.warning
        log("neynar.error method=%s path=%s kind=%s", request.method, request.url.path, exc.kind.value)
        payload = ErrorResponse(error=public_message or exc.message)
        return JSONResponse(status_code=status_code, content=payload.model_dump())

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.error("request.error method=%s path=%s", request.method, request.url.path, exc_info=exc)
        payload = ErrorResponse(error="Internal server error")
        return JSONResponse(status_code=500, content=payload.model_dump())

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        route = request.scope.get("route")
        route_path = getattr(route, "path", request.url.path)
        route_key = (request.method.upper(), route_path)
        if route_key in _PAYLOAD_VALIDATION_PATHS:
            payload = ErrorResponse(error="Invalid request payload")
            return JSONResponse(status_code=400, content=payload.model_dump())
        if route_key in _FID_VALIDATION_PATHS:
            payload = ErrorResponse(error="Invalid FID")
            return JSONResponse(status_code=400, content=payload.model_dump())

        return await request_validation_exception_handler(request, exc)

    api_prefix = "/api"
    app.include_router(me_router, prefix=api_prefix)
    app.include_router(users_router, prefix=api_prefix)
    app.include_router(internal_router, prefix=api_prefix)

    def custom_openapi() -> dict:
        if app.openapi_schema:
            return app.openapi_schema
        schema = get_openapi(
            title=app.title,
            version=app.version,
            description=app.description,
            routes=app.routes,
        )
        _apply_contract_response_codes(schema)
        app.openapi_schema = schema
        return app.openapi_schema

    app.openapi = custom_openapi

    return app


app = create_app()
