"""
Translation and summarization service for the PDF Research Assistant
"""
import logging
from typing import Optional

from models.document import Page
from models.analysis import SummaryLength, SummaryResult, TranslationResult, LANGUAGE_CODES
from services.llm_service import LLMService
from services.pdf_processor import PDFProcessor
from services.workspace import Workspace
from utils.exceptions import NoDocumentError, ValidationError
from utils.error_handlers import log_processing_step

logger = logging.getLogger(__name__)


class AnalysisService:
    """Produces the current translation and summary of a page's document"""

    def __init__(
        self,
        workspace: Workspace,
        llm_service: LLMService,
        pdf_processor: Optional[PDFProcessor] = None
    ):
        self.workspace = workspace
        self.llm_service = llm_service
        self.pdf_processor = pdf_processor or PDFProcessor()

    def resolve_source_language(self, detected: str, requested: Optional[str]) -> str:
        """Use the requested language, or map the detected code to a supported one"""
        if requested:
            return requested

        language = LANGUAGE_CODES.get(detected)
        if language is None:
            raise ValidationError(
                message="Could not determine the document language; please choose a source language",
                field_name="source_language",
                field_value=detected,
                validation_rule="supported_language"
            )
        return language

    def translate(
        self,
        target_language: str,
        source_language: Optional[str] = None,
        text: Optional[str] = None
    ) -> TranslationResult:
        """
        Translate the translate page's text and make it the page's translation.

        Args:
            target_language: Language to translate into
            source_language: Language of the text; detected when omitted
            text: Edited or pasted text to translate instead of the uploaded
                document's content

        Raises:
            NoDocumentError: If there is neither text nor a document
            ValidationError: If the languages cannot be used
            GenerationFailedError: If the remote call fails; the previous
                translation is kept
        """
        session = self.workspace.get(Page.TRANSLATE)

        if text and text.strip():
            original_text = text
            detected = self.pdf_processor.detect_language(text)[0]
        else:
            if session.document is None:
                raise NoDocumentError(Page.TRANSLATE.value, "Please upload a document or paste text first")
            original_text = session.document.content
            detected = session.document.language

        source = self.resolve_source_language(detected, source_language)
        if source == target_language:
            raise ValidationError(
                message="Source and target languages must differ",
                field_name="target_language",
                field_value=target_language,
                validation_rule="differs_from_source"
            )

        log_processing_step("translate", {"source": source, "target": target_language, "chars": len(original_text)})
        translated_text = self.llm_service.translate(original_text, source, target_language)

        result = TranslationResult(
            original_text=original_text,
            source_language=source,
            target_language=target_language,
            translated_text=translated_text
        )
        session.translation = result
        return result

    def summarize(self, length: SummaryLength = SummaryLength.MEDIUM) -> SummaryResult:
        """
        Summarize the summarize page's document, replacing any earlier summary.

        Raises:
            NoDocumentError: If the page has no document
            GenerationFailedError: If the remote call fails; the previous
                summary is kept
        """
        session = self.workspace.get(Page.SUMMARIZE)
        document = session.require_document()

        log_processing_step("summarize", {"length": SummaryLength(length).value, "chars": len(document.content)})
        parsed = self.llm_service.summarize(document.content, length)

        result = SummaryResult(
            original_text=document.content,
            summary=parsed.summary,
            summary_length=length,
            key_points=parsed.key_points
        )
        session.summary = result
        return result
