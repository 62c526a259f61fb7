"""
Service layer for the PDF Research Assistant
"""
from .pdf_processor import PDFProcessor, ExtractionResult
from .credential_store import KeyValueStore, CredentialStore
from .llm_service import (
    LLMService, LLMClientProvider, PromptTemplate, ResponseParser, QAResult, SummaryParseResult
)
from .workspace import Workspace, PageSession
from .document_service import DocumentService
from .question_service import QuestionService
from .analysis_service import AnalysisService
from .export_service import ExportService, ExportArtifact

__all__ = [
    'PDFProcessor', 'ExtractionResult',
    'KeyValueStore', 'CredentialStore',
    'LLMService', 'LLMClientProvider', 'PromptTemplate', 'ResponseParser', 'QAResult', 'SummaryParseResult',
    'Workspace', 'PageSession',
    'DocumentService',
    'QuestionService',
    'AnalysisService',
    'ExportService', 'ExportArtifact'
]
