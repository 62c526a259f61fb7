"""
PDF processing service for validation, text extraction and language detection
"""
import io
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple
import PyPDF2
import pdfplumber
from langdetect import detect_langs, DetectorFactory
from langdetect.lang_detect_exception import LangDetectException

from config import settings
from utils.exceptions import (
    InvalidFormatError, TooLargeError, CorruptDocumentError, ExtractionFailedError
)
from utils.error_handlers import log_processing_step

# Set seed for consistent language detection results
DetectorFactory.seed = 0

logger = logging.getLogger(__name__)


@dataclass
class ExtractionResult:
    """Text pulled out of a PDF"""
    content: str
    page_count: int
    metadata: Dict[str, str] = field(default_factory=dict)
    failed_pages: List[int] = field(default_factory=list)


class PDFProcessor:
    """
    Service for validating PDF uploads and extracting their text.

    Validation is a dry-run structural parse with PyPDF2; extraction re-parses
    the bytes with pdfplumber and reads the pages one at a time so that a single
    unreadable page does not lose the rest of the document.
    """

    def __init__(self, max_file_size: Optional[int] = None):
        """
        Initialize the PDF processor

        Args:
            max_file_size: Upload size limit in bytes (defaults to settings.max_file_size_bytes)
        """
        self.max_file_size = max_file_size if max_file_size is not None else settings.max_file_size_bytes

    def validate(self, filename: str, content: bytes) -> None:
        """
        Reject files that cannot be used, without keeping anything.

        Args:
            filename: Original filename of the upload
            content: Raw file bytes

        Raises:
            InvalidFormatError: If the filename lacks the .pdf extension
            TooLargeError: If the file exceeds the size limit
            CorruptDocumentError: If the PDF cannot be parsed or has no pages
        """
        if not filename or not filename.lower().endswith('.pdf'):
            raise InvalidFormatError(filename or "unknown")

        file_size = len(content)
        if file_size > self.max_file_size:
            raise TooLargeError(filename, file_size, self.max_file_size)

        try:
            reader = PyPDF2.PdfReader(io.BytesIO(content))
            page_count = len(reader.pages)
        except Exception as e:
            logger.warning(f"PDF validation failed for {filename}: {e}")
            raise CorruptDocumentError(
                f"Invalid PDF file: {e}",
                filename=filename,
                original_exception=e
            )

        if page_count == 0:
            raise CorruptDocumentError("PDF has no pages", filename=filename)

        log_processing_step("pdf_validation", {"filename": filename, "pages": page_count})

    def extract(self, filename: str, content: bytes) -> ExtractionResult:
        """
        Extract text content from a PDF, page by page.

        Args:
            filename: Original filename, used for logging and errors
            content: Raw file bytes

        Returns:
            ExtractionResult with the concatenated text, the page count the
            document reports and its metadata

        Raises:
            ExtractionFailedError: If the document itself cannot be opened
        """
        try:
            with pdfplumber.open(io.BytesIO(content)) as pdf:
                page_count = len(pdf.pages)
                text, failed_pages = self._extract_pages(pdf.pages, filename)
                metadata = self._extract_metadata(pdf)
        except Exception as e:
            logger.error(f"PDF extraction error for {filename}: {e}")
            raise ExtractionFailedError(
                f"Failed to extract PDF: {e}",
                filename=filename,
                original_exception=e
            )

        logger.info(
            f"Extracted {len(text)} chars from {page_count} pages of {filename}"
            + (f" ({len(failed_pages)} pages skipped)" if failed_pages else "")
        )

        return ExtractionResult(
            content=text,
            page_count=page_count,
            metadata=metadata,
            failed_pages=failed_pages
        )

    def _extract_pages(self, pages: List[Any], filename: str) -> Tuple[str, List[int]]:
        """
        Join each page's word fragments with spaces, pages separated by a blank line.

        Pages that raise are logged and skipped.
        """
        full_text = ''
        failed_pages = []

        for page_num in range(1, len(pages) + 1):
            try:
                words = pages[page_num - 1].extract_words()
                page_text = ' '.join(word['text'] for word in words)
                full_text += page_text + '\n\n'
            except Exception as e:
                logger.warning(f"Error extracting page {page_num} of {filename}: {e}")
                failed_pages.append(page_num)
                continue

        return full_text.strip(), failed_pages

    def _extract_metadata(self, pdf: Any) -> Dict[str, str]:
        """Read the document info dictionary; any failure yields an empty mapping"""
        try:
            raw = pdf.metadata or {}
            return {str(key): self._metadata_value(value) for key, value in raw.items()}
        except Exception as e:
            logger.warning(f"Could not read PDF metadata: {e}")
            return {}

    @staticmethod
    def _metadata_value(value: Any) -> str:
        if isinstance(value, bytes):
            return value.decode('utf-8', errors='replace')
        if isinstance(value, (list, tuple)):
            return ', '.join(PDFProcessor._metadata_value(item) for item in value)
        # pdfminer PSLiteral values carry their text in .name
        name = getattr(value, 'name', None)
        if isinstance(name, (str, bytes)):
            return PDFProcessor._metadata_value(name)
        return str(value)

    def detect_language(self, text: str) -> Tuple[str, float]:
        """
        Detect the language of the given text.

        Args:
            text: Text to analyze for language detection

        Returns:
            Tuple of (language_code, confidence_score); ('unknown', 0.0) when
            the text is too short or detection fails
        """
        if not text or len(text.strip()) < 10:
            return 'unknown', 0.0

        try:
            # A sample keeps detection fast on long documents
            sample_text = text[:1000].strip()
            candidates = detect_langs(sample_text)
            if not candidates:
                return 'unknown', 0.0

            best = candidates[0]
            return best.lang, round(best.prob, 2)

        except LangDetectException as e:
            logger.warning(f"Language detection failed: {e}")
            return 'unknown', 0.0
