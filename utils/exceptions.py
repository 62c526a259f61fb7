"""
Custom exception classes for the PDF Research Assistant

This module defines all custom exceptions used throughout the application,
providing structured error handling with proper error codes and messages.
"""
import time
from typing import Optional, Dict, Any
from enum import Enum


class ErrorCode(Enum):
    """Enumeration of error codes for consistent error handling"""

    # General errors
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    ACCESS_DENIED = "ACCESS_DENIED"
    NO_DOCUMENT = "NO_DOCUMENT"

    # Upload and extraction errors
    INVALID_FILE_TYPE = "INVALID_FILE_TYPE"
    FILE_TOO_LARGE = "FILE_TOO_LARGE"
    CORRUPT_DOCUMENT = "CORRUPT_DOCUMENT"
    TEXT_EXTRACTION_FAILED = "TEXT_EXTRACTION_FAILED"

    # Remote generation errors
    GENERATION_FAILED = "GENERATION_FAILED"


class AssistantException(Exception):
    """
    Base exception class for all PDF Research Assistant errors

    Provides structured error information with error codes, messages,
    and optional details for debugging and user feedback.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None
    ):
        """
        Initialize the exception

        Args:
            message: Human-readable error message
            error_code: Structured error code for programmatic handling
            details: Optional dictionary with additional error details
            original_exception: Original exception that caused this error (if any)
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.original_exception = original_exception
        self.timestamp = time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime())

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert exception to dictionary format for API responses

        Returns:
            Dictionary representation of the error
        """
        error_dict = {
            "error": {
                "code": self.error_code.value,
                "message": self.message,
                "timestamp": self.timestamp
            }
        }

        if self.details:
            error_dict["error"]["details"] = self.details

        return error_dict

    def __str__(self) -> str:
        """String representation of the exception"""
        return f"{self.error_code.value}: {self.message}"


class DocumentError(AssistantException):
    """Exception for upload validation and text extraction"""

    def __init__(
        self,
        message: str,
        filename: Optional[str] = None,
        file_size: Optional[int] = None,
        error_code: ErrorCode = ErrorCode.TEXT_EXTRACTION_FAILED,
        original_exception: Optional[Exception] = None
    ):
        details = {}
        if filename:
            details["filename"] = filename
        if file_size is not None:
            details["file_size"] = file_size

        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
            original_exception=original_exception
        )


class InvalidFormatError(DocumentError):
    """The uploaded file does not carry a .pdf extension"""

    def __init__(self, filename: str):
        super().__init__(
            message="File must be a PDF (.pdf extension)",
            filename=filename,
            error_code=ErrorCode.INVALID_FILE_TYPE
        )


class TooLargeError(DocumentError):
    """The uploaded file exceeds the size limit"""

    def __init__(self, filename: str, file_size: int, max_size: int):
        super().__init__(
            message=f"File size must be less than {max_size // (1024 * 1024)}MB",
            filename=filename,
            file_size=file_size,
            error_code=ErrorCode.FILE_TOO_LARGE
        )
        self.details["max_size"] = max_size


class CorruptDocumentError(DocumentError):
    """The file could not be parsed as a PDF or has no pages"""

    def __init__(
        self,
        message: str,
        filename: Optional[str] = None,
        original_exception: Optional[Exception] = None
    ):
        super().__init__(
            message=message,
            filename=filename,
            error_code=ErrorCode.CORRUPT_DOCUMENT,
            original_exception=original_exception
        )


class ExtractionFailedError(DocumentError):
    """The document could not be opened for text extraction"""

    def __init__(
        self,
        message: str,
        filename: Optional[str] = None,
        original_exception: Optional[Exception] = None
    ):
        super().__init__(
            message=message,
            filename=filename,
            error_code=ErrorCode.TEXT_EXTRACTION_FAILED,
            original_exception=original_exception
        )


class GenerationFailedError(AssistantException):
    """
    Exception for remote text generation.

    Network, authentication, quota and missing-credential failures are all
    reported through this one type.
    """

    def __init__(
        self,
        message: str,
        model_name: Optional[str] = None,
        task: Optional[str] = None,
        original_exception: Optional[Exception] = None
    ):
        details = {}
        if model_name:
            details["model_name"] = model_name
        if task:
            details["task"] = task

        super().__init__(
            message=message,
            error_code=ErrorCode.GENERATION_FAILED,
            details=details,
            original_exception=original_exception
        )


class NoDocumentError(AssistantException):
    """Exception raised when a page has no document or result to work on"""

    def __init__(self, page: str, message: Optional[str] = None):
        super().__init__(
            message=message or f"No document has been uploaded to the '{page}' page yet. Please upload a PDF first.",
            error_code=ErrorCode.NO_DOCUMENT,
            details={"page": page}
        )


class AccessDeniedError(AssistantException):
    """Exception raised when the access gate is locked"""

    def __init__(self, message: str = "Access code required"):
        super().__init__(message=message, error_code=ErrorCode.ACCESS_DENIED)


class ValidationError(AssistantException):
    """Exception for input validation errors"""

    def __init__(
        self,
        message: str,
        field_name: Optional[str] = None,
        field_value: Optional[Any] = None,
        validation_rule: Optional[str] = None,
        original_exception: Optional[Exception] = None
    ):
        details = {}
        if field_name:
            details["field_name"] = field_name
        if field_value is not None:
            # Convert to string and truncate for safety
            value_str = str(field_value)
            details["field_value"] = value_str[:100] + "..." if len(value_str) > 100 else value_str
        if validation_rule:
            details["validation_rule"] = validation_rule

        super().__init__(
            message=message,
            error_code=ErrorCode.VALIDATION_ERROR,
            details=details,
            original_exception=original_exception
        )
