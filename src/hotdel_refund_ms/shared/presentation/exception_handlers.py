"""Exception handlers for the FastAPI application."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from hotdel_refund_ms.shared.core.logging import get_logger
from hotdel_refund_ms.shared.domain.exceptions import (
    AlreadyCancelledError,
    AuthenticationError,
    ConflictingPaymentError,
    ForbiddenError,
    InvalidPaymentSignatureError,
    InvalidRequestError,
    OrderNotFoundError,
    OrderNotPayableError,
    RefundServiceError,
)

logger = get_logger(__name__)


def _error_response(status_code: int, message: str, error: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "message": message,
            "errors": [error],
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers."""

    @app.exception_handler(InvalidRequestError)
    async def invalid_request_handler(
        request: Request, exc: InvalidRequestError
    ) -> JSONResponse:
        return _error_response(400, str(exc), "Invalid request")

    @app.exception_handler(AuthenticationError)
    async def authentication_handler(
        request: Request, exc: AuthenticationError
    ) -> JSONResponse:
        response = _error_response(401, str(exc), "Authentication required")
        response.headers["WWW-Authenticate"] = "Bearer"
        return response

    @app.exception_handler(InvalidPaymentSignatureError)
    async def payment_signature_handler(
        request: Request, exc: InvalidPaymentSignatureError
    ) -> JSONResponse:
        return _error_response(401, str(exc), "Payment verification failed")

    @app.exception_handler(ForbiddenError)
    async def forbidden_handler(request: Request, exc: ForbiddenError) -> JSONResponse:
        return _error_response(403, str(exc), "Forbidden")

    @app.exception_handler(OrderNotFoundError)
    async def order_not_found_handler(
        request: Request, exc: OrderNotFoundError
    ) -> JSONResponse:
        return _error_response(404, str(exc), "Order not found")

    @app.exception_handler(AlreadyCancelledError)
    async def already_cancelled_handler(
        request: Request, exc: AlreadyCancelledError
    ) -> JSONResponse:
        return _error_response(409, str(exc), "Order already cancelled")

    @app.exception_handler(ConflictingPaymentError)
    async def conflicting_payment_handler(
        request: Request, exc: ConflictingPaymentError
    ) -> JSONResponse:
        return _error_response(409, str(exc), "Order already paid")

    @app.exception_handler(OrderNotPayableError)
    async def order_not_payable_handler(
        request: Request, exc: OrderNotPayableError
    ) -> JSONResponse:
        return _error_response(409, str(exc), "Order cannot be paid")

    @app.exception_handler(RefundServiceError)
    async def service_error_handler(
        request: Request, exc: RefundServiceError
    ) -> JSONResponse:
        logger.error("service_error", path=request.url.path, error=str(exc))
        return _error_response(500, str(exc), "Refund service error")

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        logger.exception("unhandled_error", path=request.url.path)
        return _error_response(500, "Internal server error", str(exc))
