"""
Question and answer models for the PDF Research Assistant
"""
from datetime import datetime, timezone
from pydantic import BaseModel, Field, field_validator, ConfigDict
import uuid


class QAExchange(BaseModel):
    """
    One question asked on the Q&A page.

    The answer stays empty until the remote call resolves; the exchange is then
    completed in place.
    """
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "q-123e4567-e89b-12d3-a456-426614174000",
                "question": "What is the accuracy?",
                "answer": "The model reaches 95% accuracy on the test set.",
                "excerpts": ["The model achieves 95% accuracy on the test set."],
                "timestamp": "2024-01-15T10:30:00Z"
            }
        }
    )

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), description="Unique exchange identifier")
    question: str = Field(..., min_length=1, max_length=2000, description="The question text")
    answer: str = Field("", description="The generated answer, empty while pending")
    excerpts: list[str] = Field(default_factory=list, description="Document sentences related to the question")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc), description="When the question was asked")

    @field_validator('question')
    @classmethod
    def validate_question_text(cls, v):
        """Validate question text is meaningful"""
        stripped = v.strip()
        if not stripped:
            raise ValueError('Question text cannot be empty or only whitespace')
        return stripped

    @property
    def is_pending(self) -> bool:
        return not self.answer
