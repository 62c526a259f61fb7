"""
Document-related data models for the PDF Research Assistant
"""
from datetime import datetime, timezone
from enum import Enum
from typing import Dict
from pydantic import BaseModel, Field, field_validator, ConfigDict
import uuid


class Page(str, Enum):
    """Workspace pages, each with its own current document"""
    TRANSLATE = "translate"
    QA = "qa"
    SUMMARIZE = "summarize"


class UploadedDocument(BaseModel):
    """A PDF that was validated and had its text extracted"""
    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "filename": "paper.pdf",
                "file_size": 1048576,
                "content": "Abstract. We study ...",
                "page_count": 12,
                "metadata": {"Title": "A Study", "Producer": "pdfTeX-1.40.25"},
                "language": "en",
                "uploaded_at": "2024-01-15T10:30:00Z"
            }
        }
    )

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), description="Unique document identifier")
    filename: str = Field(..., min_length=1, description="Original filename of the uploaded document")
    file_size: int = Field(..., ge=0, description="Raw size of the uploaded file in bytes")
    content: str = Field(..., description="Extracted full text")
    page_count: int = Field(..., ge=1, description="Number of pages the document reports")
    metadata: Dict[str, str] = Field(default_factory=dict, description="Producer-defined document metadata")
    language: str = Field("unknown", description="Detected language code of the extracted text")
    uploaded_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc), description="When the document was uploaded")

    @field_validator('filename')
    @classmethod
    def validate_filename(cls, v):
        """Validate filename has proper extension"""
        if not v.lower().endswith('.pdf'):
            raise ValueError('Filename must have .pdf extension')
        return v

    @property
    def word_count(self) -> int:
        return len(self.content.split(' ')) if self.content else 0
