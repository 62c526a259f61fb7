"""
Data models for the PDF Research Assistant
"""

from .document import Page, UploadedDocument
from .question import QAExchange
from .analysis import (
    SummaryLength,
    SummaryResult,
    TranslationResult,
    SUPPORTED_LANGUAGES,
    LANGUAGE_CODES
)
from .api import (
    DocumentUploadResponse,
    TranslateRequest,
    QuestionRequest,
    SummarizeRequest,
    SummaryResponse,
    CredentialRequest,
    CredentialStatusResponse,
    CredentialValidationResponse,
    UnlockRequest,
    AccessStatusResponse,
    ErrorResponse
)

__all__ = [
    # Document models
    "Page",
    "UploadedDocument",

    # Result models
    "QAExchange",
    "SummaryLength",
    "SummaryResult",
    "TranslationResult",
    "SUPPORTED_LANGUAGES",
    "LANGUAGE_CODES",

    # API models
    "DocumentUploadResponse",
    "TranslateRequest",
    "QuestionRequest",
    "SummarizeRequest",
    "SummaryResponse",
    "CredentialRequest",
    "CredentialStatusResponse",
    "CredentialValidationResponse",
    "UnlockRequest",
    "AccessStatusResponse",
    "ErrorResponse"
]
