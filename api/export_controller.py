"""
Export controller for the PDF Research Assistant REST API
"""
import logging
from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response

from models.api import ErrorResponse
from models.document import Page

from api.dependencies import ExportServiceDep, require_access

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/export",
    tags=["export"],
    dependencies=[Depends(require_access)],
    responses={code: {"model": ErrorResponse} for code in (400, 403, 404)}
)


@router.get(
    "/{page}",
    summary="Download a page's current result",
    description="Plain text is the result verbatim; docx splits it into paragraphs on blank lines"
)
async def export_result(
    page: Page,
    format: str = Query("txt", pattern="^(txt|docx)$", description="Output format"),
    export_service: ExportServiceDep = None
) -> Response:
    artifact = export_service.export(page, format)
    return Response(
        content=artifact.content,
        media_type=artifact.media_type,
        headers={"Content-Disposition": f'attachment; filename="{artifact.filename}"'}
    )
