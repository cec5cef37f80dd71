"""
Exception handlers.

Every error leaves the API as {"error": {"kind", "message", "retryable"}} so
clients can decide between a sign-in prompt, a retry, or an inline message.
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from career_chat.core.exceptions import CareerChatError, ValidationError
from career_chat.core.logger import logger


def error_response(status_code: int, payload: dict) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": payload})


async def career_chat_error_handler(request: Request, exc: CareerChatError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.kind}: {exc.message}")
    return error_response(exc.status_code, exc.to_dict())


async def request_validation_error_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    errors = exc.errors()
    message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
    error = ValidationError(
        message,
        details=[{"loc": list(e.get("loc", ())), "msg": e.get("msg")} for e in errors],
    )
    return error_response(error.status_code, error.to_dict())


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        {
            "kind": "server_error",
            "message": "Something went wrong. Please try again.",
            "retryable": True,
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CareerChatError, career_chat_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
