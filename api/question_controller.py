"""
Question answering controller for the PDF Research Assistant REST API
"""
import logging
import time
from typing import List
from fastapi import APIRouter, HTTPException, status, Depends

from models.api import QuestionRequest, ErrorResponse
from models.question import QAExchange
from utils.exceptions import AssistantException

from api.dependencies import QuestionServiceDep, require_access

logger = logging.getLogger(__name__)

# Create router for question endpoints
router = APIRouter(
    prefix="/qa",
    tags=["questions"],
    dependencies=[Depends(require_access)],
    responses={code: {"model": ErrorResponse} for code in (403, 404, 502)}
)


@router.post(
    "/",
    response_model=QAExchange,
    status_code=status.HTTP_200_OK,
    summary="Ask a question about the Q&A page's document",
    description="The answer is restricted to the uploaded document and comes with up to three matching sentences"
)
async def ask_question(
    request: QuestionRequest,
    question_service: QuestionServiceDep = None
) -> QAExchange:
    """
    Answer a question based on the current document.

    Raises:
        NoDocumentError (404), GenerationFailedError (502)
    """
    try:
        logger.info(f"Processing question: {request.question[:100]}...")
        exchange = question_service.ask(request.question)
        logger.info(f"Question {exchange.id} answered with {len(exchange.excerpts)} excerpts")
        return exchange

    except AssistantException:
        raise

    except Exception as e:
        logger.error(f"Unexpected error in question processing: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": {
                    "code": "INTERNAL_SERVER_ERROR",
                    "message": "An unexpected error occurred while processing the question",
                    "details": {"error_type": type(e).__name__},
                    "timestamp": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime())
                }
            }
        )


@router.get(
    "/",
    response_model=List[QAExchange],
    summary="Get the Q&A history for the current document"
)
async def get_history(question_service: QuestionServiceDep = None) -> List[QAExchange]:
    return question_service.get_history()
