"""
Error handling middleware and utilities for the PDF Research Assistant

This module provides the error handling middleware, the error code to HTTP
status mapping and small logging helpers shared by the services.
"""
import logging
import time
import traceback
from typing import Dict, Any, Optional
from fastapi import Request, HTTPException, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from utils.exceptions import AssistantException, ErrorCode

logger = logging.getLogger(__name__)


STATUS_CODE_MAP = {
    ErrorCode.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_FILE_TYPE: status.HTTP_400_BAD_REQUEST,
    ErrorCode.FILE_TOO_LARGE: status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
    ErrorCode.CORRUPT_DOCUMENT: 422,
    ErrorCode.TEXT_EXTRACTION_FAILED: 422,
    ErrorCode.NO_DOCUMENT: status.HTTP_404_NOT_FOUND,
    ErrorCode.ACCESS_DENIED: status.HTTP_403_FORBIDDEN,
    ErrorCode.GENERATION_FAILED: status.HTTP_502_BAD_GATEWAY,
}


def get_status_code_for_error_code(error_code: ErrorCode) -> int:
    """Map error codes to HTTP status codes"""
    return STATUS_CODE_MAP.get(error_code, status.HTTP_500_INTERNAL_SERVER_ERROR)


class ErrorHandlingMiddleware:
    """
    Middleware for handling errors and providing consistent error responses
    """

    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        """ASGI middleware implementation"""
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request = Request(scope, receive)

        try:
            await self.app(scope, receive, send)
        except Exception as e:
            response = await self.handle_error(request, e)
            await response(scope, receive, send)

    async def handle_error(self, request: Request, exc: Exception) -> JSONResponse:
        """
        Handle different types of exceptions and return appropriate responses

        Args:
            request: The FastAPI request object
            exc: The exception that occurred

        Returns:
            JSONResponse with error details
        """
        self._log_error(request, exc)

        if isinstance(exc, AssistantException):
            return JSONResponse(
                status_code=get_status_code_for_error_code(exc.error_code),
                content=exc.to_dict()
            )
        elif isinstance(exc, HTTPException):
            return self._handle_http_exception(exc)
        elif isinstance(exc, RequestValidationError):
            return create_error_response(
                ErrorCode.VALIDATION_ERROR,
                "Request validation failed",
                status_code=422,
                details={"validation_errors": exc.errors()}
            )
        else:
            return create_error_response(
                ErrorCode.INTERNAL_SERVER_ERROR,
                "An unexpected error occurred",
                details={"error_type": type(exc).__name__}
            )

    def _log_error(self, request: Request, exc: Exception) -> None:
        """Log error with request context"""
        context = {
            "error_id": f"error_{int(time.time() * 1000)}",
            "method": request.method,
            "url": str(request.url),
            "exception_type": type(exc).__name__,
            "exception_message": str(exc),
            "client_ip": request.client.host if request.client else "unknown"
        }

        if isinstance(exc, (AssistantException, HTTPException)):
            logger.warning(f"Handled exception: {context}")
        else:
            logger.error(f"Unhandled exception: {context}")
            logger.error(f"Traceback: {traceback.format_exc()}")

    def _handle_http_exception(self, exc: HTTPException) -> JSONResponse:
        """Handle FastAPI HTTP exceptions"""
        if isinstance(exc.detail, dict):
            return JSONResponse(status_code=exc.status_code, content=exc.detail)

        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": {
                    "code": "HTTP_ERROR",
                    "message": str(exc.detail),
                    "timestamp": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime())
                }
            }
        )


# Utility functions for error handling

def log_processing_step(step_name: str, details: Optional[Dict[str, Any]] = None):
    """
    Log a processing step with optional details

    Args:
        step_name: Name of the processing step
        details: Optional dictionary with step details
    """
    log_message = f"Processing step: {step_name}"
    if details:
        log_message += f" - {details}"

    logger.info(log_message)


def log_performance_metric(operation: str, duration_ms: int, details: Optional[Dict[str, Any]] = None):
    """
    Log performance metrics for operations

    Args:
        operation: Name of the operation
        duration_ms: Duration in milliseconds
        details: Optional dictionary with additional details
    """
    log_message = f"Performance: {operation} completed in {duration_ms}ms"
    if details:
        log_message += f" - {details}"

    logger.info(log_message)


def create_error_response(
    error_code: ErrorCode,
    message: str,
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
    details: Optional[Dict[str, Any]] = None
) -> JSONResponse:
    """
    Create a standardized error response

    Args:
        error_code: The error code
        message: Error message
        status_code: HTTP status code
        details: Optional error details

    Returns:
        JSONResponse with error information
    """
    error_dict = {
        "error": {
            "code": error_code.value,
            "message": message,
            "timestamp": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime())
        }
    }

    if details:
        error_dict["error"]["details"] = details

    return JSONResponse(status_code=status_code, content=error_dict)
