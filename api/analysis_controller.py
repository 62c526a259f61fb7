"""
Translation and summarization controller for the PDF Research Assistant REST API
"""
import logging
from typing import Optional
from fastapi import APIRouter, status, Depends

from models.api import TranslateRequest, SummarizeRequest, SummaryResponse, ErrorResponse
from models.analysis import SummaryResult, TranslationResult, SUPPORTED_LANGUAGES
from models.document import Page

from api.dependencies import AnalysisServiceDep, require_access

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["analysis"],
    dependencies=[Depends(require_access)],
    responses={code: {"model": ErrorResponse} for code in (400, 403, 404, 502)}
)


def _summary_response(result: SummaryResult) -> SummaryResponse:
    return SummaryResponse(
        id=result.id,
        summary=result.summary,
        summary_length=result.summary_length,
        key_points=result.key_points,
        summary_word_count=result.summary_word_count,
        key_point_count=len(result.key_points),
        compression_ratio=result.compression_ratio
    )


@router.get("/languages", summary="List supported translation languages")
async def list_languages():
    return {"languages": SUPPORTED_LANGUAGES}


@router.post(
    "/translate",
    response_model=TranslationResult,
    status_code=status.HTTP_200_OK,
    summary="Translate the translate page's document or pasted text"
)
async def translate(request: TranslateRequest, analysis_service: AnalysisServiceDep = None) -> TranslationResult:
    """
    Raises:
        NoDocumentError (404), ValidationError (400), GenerationFailedError (502)
    """
    result = analysis_service.translate(request.target_language, request.source_language, request.text)
    logger.info(f"Translated {len(result.original_text)} chars "
                f"{result.source_language} -> {result.target_language}")
    return result


@router.get(
    "/translate",
    response_model=Optional[TranslationResult],
    summary="Get the current translation"
)
async def get_translation(analysis_service: AnalysisServiceDep = None) -> Optional[TranslationResult]:
    return analysis_service.workspace.get(Page.TRANSLATE).translation


@router.post(
    "/summarize",
    response_model=SummaryResponse,
    status_code=status.HTTP_200_OK,
    summary="Summarize the summarize page's document"
)
async def summarize(request: SummarizeRequest, analysis_service: AnalysisServiceDep = None) -> SummaryResponse:
    """
    Raises:
        NoDocumentError (404), GenerationFailedError (502)
    """
    result = analysis_service.summarize(request.length)
    logger.info(f"Summary {result.id}: {result.summary_word_count} words, {len(result.key_points)} key points")
    return _summary_response(result)


@router.get(
    "/summarize",
    response_model=Optional[SummaryResponse],
    summary="Get the current summary"
)
async def get_summary(analysis_service: AnalysisServiceDep = None) -> Optional[SummaryResponse]:
    result = analysis_service.workspace.get(Page.SUMMARIZE).summary
    return _summary_response(result) if result else None
