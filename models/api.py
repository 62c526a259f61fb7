"""
API request and response models for the PDF Research Assistant
"""
from typing import Dict, Optional
from pydantic import BaseModel, Field, field_validator, ConfigDict

from models.analysis import SummaryLength, SUPPORTED_LANGUAGES


def _check_language(v):
    if v is not None and v not in SUPPORTED_LANGUAGES:
        raise ValueError(f"Unsupported language '{v}'. Supported: {', '.join(SUPPORTED_LANGUAGES)}")
    return v


class DocumentUploadResponse(BaseModel):
    """Response model for a document upload"""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "message": "Document processed successfully",
                "document_id": "123e4567-e89b-12d3-a456-426614174000",
                "filename": "paper.pdf",
                "file_size": 1048576,
                "page_count": 12,
                "character_count": 48213,
                "language": "en",
                "metadata": {"Title": "A Study"},
                "processing_time_ms": 850
            }
        }
    )

    message: str = Field(..., description="Success message")
    document_id: str = Field(..., description="Identifier of the new current document")
    filename: str = Field(..., description="Original filename")
    file_size: int = Field(..., ge=0, description="Raw byte length of the upload")
    page_count: int = Field(..., ge=1, description="Pages the document reports")
    character_count: int = Field(..., ge=0, description="Length of the extracted text")
    language: str = Field(..., description="Detected language code")
    metadata: Dict[str, str] = Field(default_factory=dict, description="Document metadata")
    processing_time_ms: int = Field(..., ge=0, description="Time taken to validate and extract in milliseconds")


class TranslateRequest(BaseModel):
    """Request model for translating the current document"""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {"source_language": "English", "target_language": "Vietnamese"}
        }
    )

    source_language: Optional[str] = Field(None, description="Language of the document; detected when omitted")
    target_language: str = Field(..., description="Language to translate into")
    text: Optional[str] = Field(None, description="Edited or pasted text to translate instead of the uploaded document")

    @field_validator('source_language', 'target_language')
    @classmethod
    def validate_language(cls, v):
        """Validate language is one of the supported languages"""
        return _check_language(v)


class QuestionRequest(BaseModel):
    """Request model for question answering"""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {"question": "What is the accuracy of the proposed model?"}
        }
    )

    question: str = Field(..., min_length=1, max_length=2000, description="The question to answer")

    @field_validator('question')
    @classmethod
    def validate_question(cls, v):
        """Validate question is meaningful"""
        stripped = v.strip()
        if not stripped:
            raise ValueError('Question cannot be empty or only whitespace')
        return stripped


class SummarizeRequest(BaseModel):
    """Request model for summarizing the current document"""
    model_config = ConfigDict(
        json_schema_extra={"example": {"length": "medium"}}
    )

    length: SummaryLength = Field(SummaryLength.MEDIUM, description="Summary length class")


class SummaryResponse(BaseModel):
    """Response model for a summary with its statistics"""

    id: str
    summary: str
    summary_length: SummaryLength
    key_points: list[str]
    summary_word_count: int = Field(..., ge=0)
    key_point_count: int = Field(..., ge=0)
    compression_ratio: float = Field(..., ge=0.0, description="Summary words as a percentage of original words")


class CredentialRequest(BaseModel):
    """Request model for storing the API key"""

    api_key: str = Field(..., min_length=1, description="API key for the text-generation service")

    @field_validator('api_key')
    @classmethod
    def validate_api_key(cls, v):
        stripped = v.strip()
        if not stripped:
            raise ValueError('API key cannot be empty or only whitespace')
        return stripped


class CredentialStatusResponse(BaseModel):
    """Where the active credential comes from"""

    configured: bool
    source: str = Field(..., pattern="^(stored|environment|none)$")


class CredentialValidationResponse(BaseModel):
    valid: bool


class UnlockRequest(BaseModel):
    code: str = Field(..., description="Access code")


class AccessStatusResponse(BaseModel):
    required: bool = Field(..., description="Whether an access code is configured")
    unlocked: bool


class ErrorResponse(BaseModel):
    """Standard error response model"""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "error": {
                    "code": "CORRUPT_DOCUMENT",
                    "message": "Invalid PDF file: EOF marker not found",
                    "details": {"filename": "paper.pdf"},
                    "timestamp": "2024-01-15T10:30:00Z"
                }
            }
        }
    )

    error: dict = Field(..., description="Error details")
