"""
In-process session state for the three workspace pages
"""
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from models.document import Page, UploadedDocument
from models.question import QAExchange
from models.analysis import SummaryResult, TranslationResult
from utils.exceptions import NoDocumentError

logger = logging.getLogger(__name__)


@dataclass
class PageSession:
    """Current document of one page and the results derived from it"""
    page: Page
    document: Optional[UploadedDocument] = None
    translation: Optional[TranslationResult] = None
    summary: Optional[SummaryResult] = None
    qa_history: List[QAExchange] = field(default_factory=list)

    def clear_results(self) -> None:
        self.translation = None
        self.summary = None
        self.qa_history = []

    def replace_document(self, document: UploadedDocument) -> None:
        """Derived results are dropped before the new document becomes current"""
        self.clear_results()
        self.document = document

    def reset(self) -> None:
        self.clear_results()
        self.document = None

    def require_document(self) -> UploadedDocument:
        if self.document is None:
            raise NoDocumentError(self.page.value)
        return self.document

    def add_exchange(self, exchange: QAExchange) -> None:
        self.qa_history.append(exchange)

    def remove_exchange(self, exchange_id: str) -> None:
        self.qa_history = [e for e in self.qa_history if e.id != exchange_id]


class Workspace:
    """One PageSession per page, for the single local user"""

    def __init__(self):
        self.sessions: Dict[Page, PageSession] = {page: PageSession(page=page) for page in Page}

    def get(self, page: Page) -> PageSession:
        return self.sessions[Page(page)]

    def reset_all(self) -> None:
        for session in self.sessions.values():
            session.reset()
        logger.info("Workspace reset")
