"""
Error handling middleware for Storefront Service.
Provides centralized exception handling and standardized error responses.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ...core.exceptions import EmptyCartError, ProductNotFoundError
from ...utils.logging import setup_storefront_logging as setup_logging

logger = setup_logging("storefront_service.error_handler")


class StorefrontErrorHandler:
    """
    Centralized error handling for Storefront Service.

    Every error leaves the service as
    {"error": {"type", "message", "correlation_id", "timestamp", "path", "method"}}.
    """

    @staticmethod
    def setup_error_handlers(app: FastAPI) -> None:
        @app.exception_handler(StarletteHTTPException)
        async def http_exception_handler(
            request: Request, exc: StarletteHTTPException
        ) -> JSONResponse:
            return StorefrontErrorHandler._create_error_response(
                request=request,
                status_code=exc.status_code,
                error_type="http_error",
                message=str(exc.detail),
            )

        @app.exception_handler(RequestValidationError)
        async def validation_exception_handler(
            request: Request, exc: RequestValidationError
        ) -> JSONResponse:
            error_details: list[Dict[str, Any]] = []
            for error in exc.errors():
                error_details.append(
                    {
                        "field": ".".join(str(loc) for loc in error["loc"]),
                        "message": error["msg"],
                        "type": error["type"],
                    }
                )

            return StorefrontErrorHandler._create_error_response(
                request=request,
                status_code=422,
                error_type="validation_error",
                message="Request validation failed",
                details={"validation_errors": error_details},
            )

        @app.exception_handler(ProductNotFoundError)
        async def product_not_found_handler(
            request: Request, exc: ProductNotFoundError
        ) -> JSONResponse:
            return StorefrontErrorHandler._create_error_response(
                request=request,
                status_code=404,
                error_type="not_found",
                message=str(exc),
                details={"product_id": exc.product_id},
            )

        @app.exception_handler(EmptyCartError)
        async def empty_cart_handler(
            request: Request, exc: EmptyCartError
        ) -> JSONResponse:
            return StorefrontErrorHandler._create_error_response(
                request=request,
                status_code=400,
                error_type="cart_error",
                message=str(exc),
            )

        @app.exception_handler(ValueError)
        async def value_error_handler(
            request: Request, exc: ValueError
        ) -> JSONResponse:
            return StorefrontErrorHandler._create_error_response(
                request=request,
                status_code=400,
                error_type="value_error",
                message=str(exc),
            )

        @app.exception_handler(Exception)
        async def general_exception_handler(
            request: Request, exc: Exception
        ) -> JSONResponse:
            logger.error(
                "Unhandled exception occurred",
                extra={
                    "correlation_id": getattr(
                        request.state, "correlation_id", "unknown"
                    ),
                    "path": request.url.path,
                    "method": request.method,
                    "exception_type": type(exc).__name__,
                    "exception_message": str(exc),
                },
                exc_info=exc,
            )

            return StorefrontErrorHandler._create_error_response(
                request=request,
                status_code=500,
                error_type="internal_server_error",
                message="Internal server error",
            )

    @staticmethod
    def _create_error_response(
        request: Request,
        status_code: int,
        error_type: str,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> JSONResponse:
        """
        Create a standardized error response.

        Args:
            request: The FastAPI request object
            status_code: HTTP status code
            error_type: Type of error for categorization
            message: Human-readable error message
            details: Additional error details

        Returns:
            JSONResponse with standardized error format
        """
        correlation_id = getattr(request.state, "correlation_id", "unknown")

        error_response: Dict[str, Any] = {
            "error": {
                "type": error_type,
                "message": message,
                "correlation_id": correlation_id,
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "path": request.url.path,
                "method": request.method,
            }
        }

        if details:
            error_response["error"]["details"] = details

        # 5xx errors are already logged with their traceback
        if status_code < 500:
            logger.warning(
                f"Client error: {error_type}",
                extra={
                    "correlation_id": correlation_id,
                    "status_code": status_code,
                    "error_type": error_type,
                    "path": request.url.path,
                    "method": request.method,
                },
            )

        return JSONResponse(status_code=status_code, content=error_response)


def setup_storefront_error_handling(app: FastAPI) -> None:
    """Register the storefront error handlers on an application."""
    StorefrontErrorHandler.setup_error_handlers(app)
    logger.info("Storefront error handling configured")
