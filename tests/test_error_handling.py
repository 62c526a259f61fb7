"""
Tests for the error hierarchy and its HTTP mapping
"""
import asyncio
import warnings

import pytest
from fastapi import Request
from fastapi.exceptions import RequestValidationError

from utils.exceptions import (
    AssistantException, ErrorCode, InvalidFormatError, TooLargeError, CorruptDocumentError,
    ExtractionFailedError, GenerationFailedError, NoDocumentError, AccessDeniedError, ValidationError
)
from utils.error_handlers import ErrorHandlingMiddleware, get_status_code_for_error_code, create_error_response


class TestExceptions:
    """Test exception construction and serialization"""

    def test_to_dict_envelope(self):
        exc = AssistantException("Something broke", ErrorCode.INTERNAL_SERVER_ERROR, details={"k": "v"})
        data = exc.to_dict()

        assert data["error"]["code"] == "INTERNAL_SERVER_ERROR"
        assert data["error"]["message"] == "Something broke"
        assert data["error"]["details"] == {"k": "v"}
        assert data["error"]["timestamp"].endswith("Z")

    def test_to_dict_without_details(self):
        assert "details" not in AccessDeniedError().to_dict()["error"]

    def test_str(self):
        assert str(NoDocumentError("qa")) == "NO_DOCUMENT: " + NoDocumentError("qa").message

    def test_invalid_format(self):
        exc = InvalidFormatError("notes.txt")

        assert exc.error_code == ErrorCode.INVALID_FILE_TYPE
        assert exc.message == "File must be a PDF (.pdf extension)"
        assert exc.details["filename"] == "notes.txt"

    def test_too_large(self):
        exc = TooLargeError("big.pdf", 60 * 1024 * 1024, 50 * 1024 * 1024)

        assert exc.error_code == ErrorCode.FILE_TOO_LARGE
        assert exc.message == "File size must be less than 50MB"
        assert exc.details["max_size"] == 50 * 1024 * 1024

    def test_original_exception_kept(self):
        cause = ValueError("EOF marker not found")
        exc = CorruptDocumentError("Invalid PDF file: EOF marker not found", "paper.pdf", cause)

        assert exc.original_exception is cause
        assert exc.error_code == ErrorCode.CORRUPT_DOCUMENT

    def test_generation_failed_details(self):
        exc = GenerationFailedError("Text generation failed", model_name="m", task="translate")
        assert exc.details == {"model_name": "m", "task": "translate"}

    def test_validation_error_truncates_long_values(self):
        exc = ValidationError("bad", field_name="f", field_value="x" * 500)
        assert len(exc.details["field_value"]) == 103

    def test_all_domain_errors_share_base(self):
        for exc in (
            InvalidFormatError("a"), ExtractionFailedError("m", "a.pdf"),
            GenerationFailedError("m"), NoDocumentError("qa"), AccessDeniedError()
        ):
            assert isinstance(exc, AssistantException)


class TestStatusMapping:
    """Test error code to HTTP status mapping"""

    @pytest.mark.parametrize("code,expected", [
        (ErrorCode.INVALID_FILE_TYPE, 400),
        (ErrorCode.VALIDATION_ERROR, 400),
        (ErrorCode.FILE_TOO_LARGE, 413),
        (ErrorCode.CORRUPT_DOCUMENT, 422),
        (ErrorCode.TEXT_EXTRACTION_FAILED, 422),
        (ErrorCode.NO_DOCUMENT, 404),
        (ErrorCode.ACCESS_DENIED, 403),
        (ErrorCode.GENERATION_FAILED, 502),
        (ErrorCode.INTERNAL_SERVER_ERROR, 500),
    ])
    def test_status_codes(self, code, expected):
        assert get_status_code_for_error_code(code) == expected

    def test_create_error_response(self):
        response = create_error_response(ErrorCode.NO_DOCUMENT, "Nothing here", status_code=404)
        assert response.status_code == 404

    def test_middleware_validation_error(self):
        middleware = ErrorHandlingMiddleware(app=None)
        request = Request({
            "type": "http",
            "method": "POST",
            "scheme": "http",
            "server": ("testserver", 80),
            "path": "/qa/",
            "root_path": "",
            "query_string": b"",
            "headers": [],
            "client": ("127.0.0.1", 50000),
        })

        with warnings.catch_warnings():
            warnings.simplefilter("error", DeprecationWarning)
            response = asyncio.run(middleware.handle_error(request, RequestValidationError([])))

        assert response.status_code == 422
