"""
Text-generation gateway for the PDF Research Assistant

Wraps one remote completion endpoint behind the translate, question answering
and summarization contracts. The remote API is reached through the OpenAI SDK
pointed at an OpenAI-compatible endpoint (Gemini by default).
"""
import logging
import re
import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from openai import OpenAI

from config import settings
from models.analysis import SummaryLength
from services.credential_store import CredentialStore
from utils.exceptions import GenerationFailedError
from utils.error_handlers import log_performance_metric

logger = logging.getLogger(__name__)


@dataclass
class QAResult:
    """Answer from the model plus document sentences matching the question"""
    answer: str
    excerpts: List[str] = field(default_factory=list)


@dataclass
class SummaryParseResult:
    """Summary text and key points parsed out of a model response"""
    summary: str
    key_points: List[str] = field(default_factory=list)


class PromptTemplate:
    """Templates for generating prompts"""

    TRANSLATE_TEMPLATE = """You are an expert academic translator specializing in research documents and scientific papers.

Translate the following {source_language} text to {target_language}. Maintain:
- Technical terminology accuracy
- Academic tone and formality
- Citation format preservation
- Paragraph structure and formatting

Original text:
\"\"\"
{text}
\"\"\"

Provide only the translated text without any explanations."""

    NOT_FOUND_ANSWER = "The document does not contain information about this topic"

    QUESTION_TEMPLATE = """You are an expert research assistant analyzing an academic document.

Document:
\"\"\"
{document}
\"\"\"

User Question: {question}

Instructions:
1. Answer the question based ONLY on the provided document
2. Be specific and reference relevant parts of the document
3. If the answer is not in the document, say "{not_found}"
4. Keep the answer concise but comprehensive

Provide your answer:"""

    SUMMARY_TEMPLATE = """You are an expert academic researcher. Summarize the following research document with professional precision.

Document:
\"\"\"
{text}
\"\"\"

Please provide:
1. A {length_guide} summary that captures the main concepts, methodology, findings, and implications
2. Follow with exactly 5-8 key points as a bulleted list

Format your response as:
SUMMARY:
[Your summary here]

KEY POINTS:
- [Point 1]
- [Point 2]
... etc"""

    LENGTH_GUIDE = {
        SummaryLength.BRIEF: "2-3 paragraphs (150-200 words)",
        SummaryLength.MEDIUM: "4-6 paragraphs (300-400 words)",
        SummaryLength.COMPREHENSIVE: "8-10 paragraphs (500-700 words)",
    }

    VALIDATION_PROMPT = "test"

    @classmethod
    def create_translation_prompt(cls, text: str, source_language: str, target_language: str) -> str:
        return cls.TRANSLATE_TEMPLATE.format(
            text=text,
            source_language=source_language,
            target_language=target_language
        )

    @classmethod
    def create_question_prompt(cls, document: str, question: str) -> str:
        return cls.QUESTION_TEMPLATE.format(
            document=document,
            question=question,
            not_found=cls.NOT_FOUND_ANSWER
        )

    @classmethod
    def create_summary_prompt(cls, text: str, length: SummaryLength) -> str:
        return cls.SUMMARY_TEMPLATE.format(
            text=text,
            length_guide=cls.LENGTH_GUIDE[SummaryLength(length)]
        )


class ResponseParser:
    """Post-processing of model output and document text"""

    SENTENCE_PATTERN = re.compile(r'[^.!?]+[.!?]+')
    SUMMARY_PATTERN = re.compile(r'SUMMARY:\s*([\s\S]*?)(?=KEY POINTS:|\Z)')
    KEY_POINTS_PATTERN = re.compile(r'KEY POINTS:\s*([\s\S]*?)\Z')
    FALLBACK_KEY_POINT = "Summary provided above"
    MAX_EXCERPTS = 5

    @classmethod
    def extract_excerpts(cls, text: str, query: str, limit: Optional[int] = None) -> List[str]:
        """
        Pick document sentences that contain any word of the query.

        Every whitespace-separated token of the lower-cased query counts,
        stopwords included. Sentences keep their document order.
        """
        limit = cls.MAX_EXCERPTS if limit is None else limit
        words = re.split(r'\s+', query.lower())
        sentences = cls.SENTENCE_PATTERN.findall(text)

        matches = [
            sentence.strip() for sentence in sentences
            if any(word in sentence.lower() for word in words)
        ]
        return matches[:limit]

    @classmethod
    def parse_summary(cls, response_text: str) -> SummaryParseResult:
        """
        Split a SUMMARY: / KEY POINTS: response.

        Never fails: an empty summary falls back to the whole response and an
        empty key point list to a single placeholder.
        """
        summary_match = cls.SUMMARY_PATTERN.search(response_text)
        key_points_match = cls.KEY_POINTS_PATTERN.search(response_text)

        summary = summary_match.group(1).strip() if summary_match else ''
        if not summary:
            summary = response_text

        key_points_text = key_points_match.group(1) if key_points_match else ''
        key_points = []
        for line in key_points_text.split('\n'):
            stripped = line.strip()
            if not stripped.startswith('-'):
                continue
            point = re.sub(r'^-\s*', '', stripped).strip()
            if point:
                key_points.append(point)

        if not key_points:
            key_points = [cls.FALLBACK_KEY_POINT]

        return SummaryParseResult(summary=summary, key_points=key_points)


class LLMClientProvider:
    """
    Owns the remote client handle.

    The client is built on first use from the credential the store resolves.
    invalidate() drops it; the next call builds a new one from scratch.
    """

    def __init__(self, credential_store: CredentialStore, base_url: Optional[str] = None):
        self.credential_store = credential_store
        self.base_url = base_url or settings.llm_base_url
        self._client: Optional[OpenAI] = None

    @property
    def is_built(self) -> bool:
        return self._client is not None

    def get_client(self) -> OpenAI:
        if self._client is None:
            api_key, source = self.credential_store.resolve_credential()
            if not api_key:
                raise GenerationFailedError("API key must be set when using the Gemini API.")

            self._client = OpenAI(api_key=api_key, base_url=self.base_url)
            logger.info(f"Text-generation client initialized with {source} credential")
        return self._client

    def invalidate(self) -> None:
        self._client = None
        logger.info("Text-generation client invalidated")


class LLMService:
    """Gateway to the remote text-generation endpoint"""

    def __init__(
        self,
        credential_store: Optional[CredentialStore] = None,
        model: Optional[str] = None,
        client_provider: Optional[LLMClientProvider] = None
    ):
        """
        Initialize the gateway

        Args:
            credential_store: Where the API key is resolved from
            model: Model to use (if None, will use settings.llm_model)
            client_provider: Pre-built client handle (mainly for tests)
        """
        self.credential_store = credential_store or CredentialStore.from_settings()
        self.model = model or settings.llm_model
        self.client_provider = client_provider or LLMClientProvider(self.credential_store)

    def _generate(self, prompt: str, task: str) -> str:
        """
        Make one completion call.

        Raises:
            GenerationFailedError: On any failure, including a missing key
        """
        client = self.client_provider.get_client()
        start_time = time.time()

        try:
            response = client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}]
            )
            text = response.choices[0].message.content or ''
        except Exception as e:
            logger.error(f"Text generation failed for {task}: {e}")
            raise GenerationFailedError(
                message=f"Text generation failed: {e}",
                model_name=self.model,
                task=task,
                original_exception=e
            )

        duration_ms = int((time.time() - start_time) * 1000)
        log_performance_metric("llm_api_call", duration_ms, {"model": self.model, "task": task})
        return text

    def translate(self, text: str, source_language: str, target_language: str) -> str:
        """
        Translate text, returning the generated text verbatim

        Args:
            text: Text to translate
            source_language: Language of the text
            target_language: Language to translate into
        """
        prompt = PromptTemplate.create_translation_prompt(text, source_language, target_language)
        return self._generate(prompt, task="translate")

    def answer_question(self, document_text: str, question: str) -> QAResult:
        """
        Answer a question from the document alone

        Args:
            document_text: Full document text
            question: The user's question

        Returns:
            QAResult with the model's answer and up to three matching sentences
        """
        prompt = PromptTemplate.create_question_prompt(document_text, question)
        answer = self._generate(prompt, task="answer_question")

        excerpts = ResponseParser.extract_excerpts(document_text, question)
        return QAResult(answer=answer, excerpts=excerpts[:settings.max_excerpts])

    def summarize(self, text: str, length: SummaryLength = SummaryLength.MEDIUM) -> SummaryParseResult:
        """
        Summarize text and list its key points

        Args:
            text: Text to summarize
            length: Requested length class
        """
        prompt = PromptTemplate.create_summary_prompt(text, length)
        response_text = self._generate(prompt, task="summarize")
        return ResponseParser.parse_summary(response_text)

    def validate_credential(self) -> bool:
        """Check the current credential with a trivial call; never raises"""
        try:
            result = self._generate(PromptTemplate.VALIDATION_PROMPT, task="validate_credential")
            return bool(result)
        except Exception as e:
            logger.error(f"API validation failed: {e}")
            return False

    def reset_client(self) -> None:
        """Drop the cached client so the next call picks up a changed credential"""
        self.client_provider.invalidate()

    def is_available(self) -> bool:
        """Whether a credential can be resolved"""
        api_key, _ = self.credential_store.resolve_credential()
        return api_key is not None

    def get_model_info(self) -> Dict[str, str]:
        """Get information about the configured model"""
        return {
            "model": self.model,
            "base_url": self.client_provider.base_url,
            "available": str(self.is_available())
        }
