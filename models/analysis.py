"""
Translation and summarization result models for the PDF Research Assistant
"""
from datetime import datetime, timezone
from enum import Enum
from pydantic import BaseModel, Field, ConfigDict
import uuid


class SummaryLength(str, Enum):
    """Requested summary length class"""
    BRIEF = "brief"
    MEDIUM = "medium"
    COMPREHENSIVE = "comprehensive"


SUPPORTED_LANGUAGES = [
    "English",
    "Vietnamese",
    "French",
    "Spanish",
    "German",
    "Chinese",
    "Japanese",
]

# langdetect codes for the supported languages
LANGUAGE_CODES = {
    "en": "English",
    "vi": "Vietnamese",
    "fr": "French",
    "es": "Spanish",
    "de": "German",
    "zh-cn": "Chinese",
    "zh-tw": "Chinese",
    "ja": "Japanese",
}


class TranslationResult(BaseModel):
    """Current translation of a page's document"""
    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "id": "t-123e4567-e89b-12d3-a456-426614174000",
                "original_text": "Abstract. We study ...",
                "source_language": "English",
                "target_language": "Vietnamese",
                "translated_text": "Tóm tắt. Chúng tôi nghiên cứu ...",
                "timestamp": "2024-01-15T10:30:00Z"
            }
        }
    )

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), description="Unique translation identifier")
    original_text: str = Field(..., description="Text that was translated")
    source_language: str = Field(..., min_length=1, description="Language of the original text")
    target_language: str = Field(..., min_length=1, description="Language of the translation")
    translated_text: str = Field(..., description="Generated translation, verbatim")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class SummaryResult(BaseModel):
    """Summary of a page's document with its key points"""
    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "id": "s-123e4567-e89b-12d3-a456-426614174000",
                "original_text": "Abstract. We study ...",
                "summary": "The paper studies ...",
                "summary_length": "medium",
                "key_points": ["Introduces a new method", "Reports 95% accuracy"],
                "timestamp": "2024-01-15T10:30:00Z"
            }
        }
    )

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), description="Unique summary identifier")
    original_text: str = Field(..., description="Text that was summarized")
    summary: str = Field(..., description="Summary text")
    summary_length: SummaryLength = Field(..., description="Requested length class")
    key_points: list[str] = Field(default_factory=list, description="Key points in the order the model listed them")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def summary_word_count(self) -> int:
        return len(self.summary.split(' '))

    @property
    def compression_ratio(self) -> float:
        """Summary words as a percentage of original words"""
        original_words = len(self.original_text.split(' '))
        if not original_words:
            return 0.0
        return round(self.summary_word_count / original_words * 100, 1)
