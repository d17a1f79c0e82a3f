"""Handlers de exceção — normalizam falhas no envelope de erro da API.

Formato:
    {"error": {"code", "message", "details", "statusCode"}}
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.connectors.paykaduna.errors import (
    ClientError,
    NetworkError,
    PayKadunaError,
    ServerError,
    UpstreamError,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

    from fastapi import FastAPI, Request

logger = logging.getLogger(__name__)

_BODY_LOCATIONS = {"body", "query", "path"}


def error_response(code: str, message: str, details: Any, status_code: int) -> JSONResponse:
    """Monta a resposta JSON no envelope padrão."""
    return JSONResponse(
        status_code=status_code,
        content={
            "error": {
                "code": code,
                "message": message,
                "details": details,
                "statusCode": status_code,
            }
        },
    )


def format_validation_errors(errors: Iterable[dict[str, Any]]) -> str:
    """Resume erros de validação como `campo.sub: mensagem, ...`."""
    parts = []
    for error in errors:
        location = [str(part) for part in error.get("loc", ())]
        if location and location[0] in _BODY_LOCATIONS:
            location = location[1:]
        parts.append(f"{'.'.join(location)}: {error.get('msg', 'invalid')}")
    return ", ".join(parts)


def _upstream_details(exc: UpstreamError, fallback: str) -> str:
    return exc.upstream_message or str(exc) or fallback


def map_paykaduna_error(exc: PayKadunaError) -> tuple[str, str, str, int]:
    """Traduz erros do conector em (code, message, details, status)."""
    if isinstance(exc, ClientError):
        if exc.status_code == 401:
            return (
                "UPSTREAM_UNAUTHORIZED",
                "Invalid API Key or HMAC Signature",
                _upstream_details(exc, "Authentication failed"),
                401,
            )
        if exc.status_code == 400:
            return (
                "UPSTREAM_BAD_REQUEST",
                "PayKaduna API rejected the request",
                _upstream_details(exc, "Invalid request"),
                400,
            )
        if exc.status_code == 404:
            return (
                "UPSTREAM_NOT_FOUND",
                "Resource not found",
                _upstream_details(exc, "Bill or Taxpayer not found"),
                404,
            )
    if isinstance(exc, ServerError):
        return (
            "UPSTREAM_SERVER_ERROR",
            "PayKaduna API server error",
            _upstream_details(exc, "Internal server error"),
            500,
        )
    if isinstance(exc, UpstreamError):
        # Demais 4xx e status fora das faixas
        return ("NETWORK_ERROR", "Network request failed", str(exc), 500)
    if isinstance(exc, NetworkError):
        return (
            "NETWORK_ERROR",
            "Network request failed",
            str(exc) or "Unable to connect to PayKaduna API",
            500,
        )
    return ("INTERNAL_ERROR", "Internal server error", str(exc), 500)


async def _handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = format_validation_errors(exc.errors())
    logger.info("request_validation_failed", extra={"path": request.url.path, "details": details})
    return error_response("VALIDATION_ERROR", "Request validation failed", details, 400)


async def _handle_model_validation(request: Request, exc: ValidationError) -> JSONResponse:
    details = format_validation_errors(exc.errors())
    logger.info("request_validation_failed", extra={"path": request.url.path, "details": details})
    return error_response("VALIDATION_ERROR", "Request validation failed", details, 400)


async def _handle_paykaduna_error(request: Request, exc: PayKadunaError) -> JSONResponse:
    code, message, details, status_code = map_paykaduna_error(exc)
    logger.error(
        "request_failed",
        extra={
            "path": request.url.path,
            "code": code,
            "status_code": status_code,
            "error_type": type(exc).__name__,
        },
    )
    return error_response(code, message, details, status_code)


async def _handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 404:
        return error_response(
            "NOT_FOUND",
            "Resource not found",
            f"Cannot {request.method} {request.url.path}",
            404,
        )
    return error_response("HTTP_ERROR", str(exc.detail), str(exc.detail), exc.status_code)


async def _handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "request_unhandled_error",
        extra={"path": request.url.path, "error_type": type(exc).__name__},
    )
    return error_response(
        "INTERNAL_ERROR",
        "Internal server error",
        str(exc) or "An unexpected error occurred",
        500,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Registra os handlers de erro no app."""
    app.add_exception_handler(RequestValidationError, _handle_request_validation)
    app.add_exception_handler(ValidationError, _handle_model_validation)
    app.add_exception_handler(PayKadunaError, _handle_paykaduna_error)
    app.add_exception_handler(StarletteHTTPException, _handle_http_exception)
    app.add_exception_handler(Exception, _handle_unexpected)
