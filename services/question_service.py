"""
Question answering service for the PDF Research Assistant
"""
import logging
import time
from typing import List

from models.document import Page
from models.question import QAExchange
from services.llm_service import LLMService
from services.workspace import Workspace
from utils.error_handlers import log_performance_metric

logger = logging.getLogger(__name__)


class QuestionService:
    """Keeps the Q&A page history and asks the gateway for answers"""

    def __init__(self, workspace: Workspace, llm_service: LLMService):
        """
        Initialize the question service

        Args:
            workspace: Session state holding the Q&A page
            llm_service: Gateway used to generate answers
        """
        self.workspace = workspace
        self.llm_service = llm_service

    def ask(self, question: str) -> QAExchange:
        """
        Answer a question about the Q&A page's current document.

        The exchange joins the history as soon as it is created and is filled in
        once the answer arrives. If generation fails it is taken back out and the
        error propagates.

        Raises:
            NoDocumentError: If no document has been uploaded to the Q&A page
            GenerationFailedError: If the remote call fails
        """
        session = self.workspace.get(Page.QA)
        document = session.require_document()

        exchange = QAExchange(question=question)
        session.add_exchange(exchange)

        start_time = time.time()
        try:
            result = self.llm_service.answer_question(document.content, exchange.question)
        except Exception:
            session.remove_exchange(exchange.id)
            logger.warning(f"Dropped unanswered question {exchange.id} from history")
            raise

        exchange.answer = result.answer
        exchange.excerpts = result.excerpts

        duration_ms = int((time.time() - start_time) * 1000)
        log_performance_metric("question_answering", duration_ms, {"excerpts": len(result.excerpts)})
        return exchange

    def get_history(self) -> List[QAExchange]:
        return list(self.workspace.get(Page.QA).qa_history)
