"""
Document upload service for the PDF Research Assistant

Runs an upload through validation, text extraction and language detection,
then makes the result the current document of a workspace page.
"""
import logging
import time
from typing import Optional

from models.document import Page, UploadedDocument
from services.pdf_processor import PDFProcessor
from services.workspace import Workspace
from utils.error_handlers import log_processing_step, log_performance_metric

logger = logging.getLogger(__name__)


class DocumentService:
    """
    Service for turning an uploaded file into a page's current document.

    A failed upload raises and leaves the page exactly as it was.
    """

    def __init__(
        self,
        workspace: Workspace,
        pdf_processor: Optional[PDFProcessor] = None
    ):
        """
        Initialize the document service

        Args:
            workspace: Session state the document is attached to
            pdf_processor: PDF processing service instance
        """
        self.workspace = workspace
        self.pdf_processor = pdf_processor or PDFProcessor()

    def process_upload(self, page: Page, filename: str, content: bytes) -> UploadedDocument:
        """
        Validate, extract and install a document on a page.

        Args:
            page: Page receiving the document
            filename: Original filename of the upload
            content: Raw file bytes

        Returns:
            The new current UploadedDocument

        Raises:
            InvalidFormatError, TooLargeError, CorruptDocumentError:
                If validation rejects the file
            ExtractionFailedError: If the document cannot be opened for extraction
        """
        start_time = time.time()
        log_processing_step("document_upload", {"page": Page(page).value, "filename": filename, "size": len(content)})

        self.pdf_processor.validate(filename, content)
        extraction = self.pdf_processor.extract(filename, content)
        language, confidence = self.pdf_processor.detect_language(extraction.content)

        document = UploadedDocument(
            filename=filename,
            file_size=len(content),
            content=extraction.content,
            page_count=extraction.page_count,
            metadata=extraction.metadata,
            language=language
        )

        self.workspace.get(page).replace_document(document)

        duration_ms = int((time.time() - start_time) * 1000)
        log_performance_metric(
            "document_upload",
            duration_ms,
            {
                "page": Page(page).value,
                "pages": extraction.page_count,
                "skipped_pages": extraction.failed_pages,
                "language": language,
                "language_confidence": confidence
            }
        )
        return document

    def get_document(self, page: Page) -> UploadedDocument:
        """Current document of a page; raises NoDocumentError when there is none"""
        return self.workspace.get(page).require_document()

    def reset_page(self, page: Page) -> None:
        self.workspace.get(page).reset()
        logger.info(f"Page '{Page(page).value}' reset")
