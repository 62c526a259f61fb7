"""
Document upload controller for the PDF Research Assistant REST API
"""
import logging
import time
from fastapi import APIRouter, UploadFile, File, HTTPException, status, Depends

from models.api import DocumentUploadResponse, ErrorResponse
from models.document import Page, UploadedDocument
from utils.exceptions import AssistantException

from api.dependencies import DocumentServiceDep, require_access

logger = logging.getLogger(__name__)

# Create router for document endpoints
router = APIRouter(
    prefix="/pages",
    tags=["documents"],
    dependencies=[Depends(require_access)],
    responses={code: {"model": ErrorResponse} for code in (400, 403, 404, 413, 422)}
)


def _internal_error(code: str, message: str, e: Exception) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail={
            "error": {
                "code": code,
                "message": message,
                "details": {"error_type": type(e).__name__},
                "timestamp": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime())
            }
        }
    )


@router.post(
    "/{page}/document",
    response_model=DocumentUploadResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Upload a PDF to a page",
    description="Validate a PDF, extract its text and make it the page's current document. "
                "Any earlier translation, summary or Q&A history of the page is cleared."
)
async def upload_document(
    page: Page,
    file: UploadFile = File(..., description="PDF file to upload"),
    document_service: DocumentServiceDep = None
) -> DocumentUploadResponse:
    """
    Upload and extract a PDF document.

    Raises:
        InvalidFormatError (400), TooLargeError (413), CorruptDocumentError (422),
        ExtractionFailedError (422)
    """
    start_time = time.time()

    try:
        content = await file.read()
        filename = file.filename or "unknown"

        document = document_service.process_upload(page, filename, content)

        processing_time_ms = int((time.time() - start_time) * 1000)
        logger.info(f"Document upload completed: {filename} on page {page.value}, "
                    f"{document.page_count} pages, {processing_time_ms}ms")

        return DocumentUploadResponse(
            message="Document processed successfully",
            document_id=document.id,
            filename=document.filename,
            file_size=document.file_size,
            page_count=document.page_count,
            character_count=len(document.content),
            language=document.language,
            metadata=document.metadata,
            processing_time_ms=processing_time_ms
        )

    except AssistantException:
        raise

    except Exception as e:
        logger.error(f"Unexpected error in document upload: {e}")
        raise _internal_error(
            "INTERNAL_SERVER_ERROR",
            "An unexpected error occurred while processing the document",
            e
        )


@router.get(
    "/{page}/document",
    response_model=UploadedDocument,
    summary="Get a page's current document"
)
async def get_document(page: Page, document_service: DocumentServiceDep = None) -> UploadedDocument:
    return document_service.get_document(page)


@router.delete(
    "/{page}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Reset a page",
    description="Drop the page's document and every result derived from it"
)
async def reset_page(page: Page, document_service: DocumentServiceDep = None):
    document_service.reset_page(page)
