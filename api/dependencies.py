"""
Dependency injection for the PDF Research Assistant API
"""
import logging
from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from services.credential_store import CredentialStore
from services.workspace import Workspace
from services.document_service import DocumentService
from services.question_service import QuestionService
from services.analysis_service import AnalysisService
from services.export_service import ExportService
from services.llm_service import LLMService
from utils.exceptions import AccessDeniedError

logger = logging.getLogger(__name__)


@lru_cache()
def get_credential_store():
    """
    Get credential store instance (cached singleton)
    """
    return CredentialStore.from_settings()


@lru_cache()
def get_workspace():
    """
    Get workspace instance (cached singleton)
    """
    return Workspace()


@lru_cache()
def get_llm_service():
    """
    Get LLM service instance (cached singleton)
    """
    return LLMService(credential_store=get_credential_store())


@lru_cache()
def get_document_service():
    """
    Get document service instance (cached singleton)
    """
    return DocumentService(workspace=get_workspace())


@lru_cache()
def get_question_service():
    """
    Get question service instance (cached singleton)
    """
    return QuestionService(get_workspace(), get_llm_service())


@lru_cache()
def get_analysis_service():
    """
    Get analysis service instance (cached singleton)
    """
    return AnalysisService(get_workspace(), get_llm_service())


@lru_cache()
def get_export_service():
    """
    Get export service instance (cached singleton)
    """
    return ExportService(get_workspace())


def require_access(credential_store: Annotated[CredentialStore, Depends(get_credential_store)]) -> None:
    """Reject page requests until the access code has been entered"""
    if not credential_store.is_unlocked():
        raise AccessDeniedError("Access code required. Unlock via POST /auth/unlock")


# Type annotations for dependency injection
CredentialStoreDep = Annotated[CredentialStore, Depends(get_credential_store)]
LLMServiceDep = Annotated[LLMService, Depends(get_llm_service)]
DocumentServiceDep = Annotated[DocumentService, Depends(get_document_service)]
QuestionServiceDep = Annotated[QuestionService, Depends(get_question_service)]
AnalysisServiceDep = Annotated[AnalysisService, Depends(get_analysis_service)]
ExportServiceDep = Annotated[ExportService, Depends(get_export_service)]
