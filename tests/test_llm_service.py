"""
Tests for the text-generation gateway
"""
import pytest
from unittest.mock import Mock, patch
from hypothesis import given, settings as hypothesis_settings, strategies as st

from models.analysis import SummaryLength
from services.credential_store import CredentialStore
from services.llm_service import (
    LLMService, LLMClientProvider, PromptTemplate, ResponseParser, QAResult, SummaryParseResult
)
from utils.exceptions import GenerationFailedError, ErrorCode


DOCUMENT = (
    "The model achieves 95% accuracy on the test set. "
    "It was trained on a large corpus. "
    "Accuracy improves further with more data."
)


class TestPromptTemplate:
    """Test prompt construction"""

    def test_translation_prompt(self):
        prompt = PromptTemplate.create_translation_prompt("Hello world", "English", "Vietnamese")

        assert "Translate the following English text to Vietnamese" in prompt
        assert "Hello world" in prompt
        assert "Provide only the translated text" in prompt

    def test_question_prompt_restricts_to_document(self):
        prompt = PromptTemplate.create_question_prompt(DOCUMENT, "What is the accuracy?")

        assert DOCUMENT in prompt
        assert "User Question: What is the accuracy?" in prompt
        assert "based ONLY on the provided document" in prompt
        assert PromptTemplate.NOT_FOUND_ANSWER in prompt

    @pytest.mark.parametrize("length,guide", [
        (SummaryLength.BRIEF, "2-3 paragraphs (150-200 words)"),
        (SummaryLength.MEDIUM, "4-6 paragraphs (300-400 words)"),
        (SummaryLength.COMPREHENSIVE, "8-10 paragraphs (500-700 words)"),
    ])
    def test_summary_prompt_length_guide(self, length, guide):
        prompt = PromptTemplate.create_summary_prompt(DOCUMENT, length)

        assert f"A {guide} summary" in prompt
        assert "SUMMARY:" in prompt
        assert "KEY POINTS:" in prompt

    def test_summary_prompt_accepts_plain_string_length(self):
        prompt = PromptTemplate.create_summary_prompt(DOCUMENT, "brief")
        assert "150-200 words" in prompt


class TestExtractExcerpts:
    """Test matching of document sentences against a question"""

    def test_single_word_query(self):
        excerpts = ResponseParser.extract_excerpts(DOCUMENT, "accuracy")

        assert excerpts == [
            "The model achieves 95% accuracy on the test set.",
            "Accuracy improves further with more data.",
        ]

    def test_question_with_punctuation_and_stopwords(self):
        # "accuracy?" keeps its "?"; the match comes through "the"
        text = "The model achieves 95% accuracy on the test set. Results vary by dataset."

        excerpts = ResponseParser.extract_excerpts(text, "What is the accuracy?")

        assert "The model achieves 95% accuracy on the test set." in excerpts
        assert excerpts == ["The model achieves 95% accuracy on the test set."]

    def test_no_match(self):
        assert ResponseParser.extract_excerpts(DOCUMENT, "xylophone") == []

    def test_stopwords_and_word_fragments_match(self):
        # "the" also matches inside "further"
        excerpts = ResponseParser.extract_excerpts(DOCUMENT, "the xylophone")
        assert excerpts == [
            "The model achieves 95% accuracy on the test set.",
            "Accuracy improves further with more data.",
        ]

    def test_substring_match(self):
        assert ResponseParser.extract_excerpts(DOCUMENT, "train") == ["It was trained on a large corpus."]

    def test_text_without_terminal_punctuation_has_no_sentences(self):
        assert ResponseParser.extract_excerpts("no sentence end here", "sentence") == []

    def test_default_limit_is_five_in_order(self):
        text = " ".join(f"Fact {i} about cats." for i in range(8))
        excerpts = ResponseParser.extract_excerpts(text, "cats")

        assert len(excerpts) == 5
        assert excerpts[0] == "Fact 0 about cats."
        assert excerpts[-1] == "Fact 4 about cats."

    @hypothesis_settings(max_examples=100)
    @given(
        text=st.text(alphabet="abc .!?\n", max_size=200),
        query=st.text(alphabet="abc ", min_size=1, max_size=10)
    )
    def test_excerpts_are_trimmed_sentences_of_the_text(self, text, query):
        """Property: every excerpt is a stripped piece of the text, at most five"""
        excerpts = ResponseParser.extract_excerpts(text, query)

        assert len(excerpts) <= ResponseParser.MAX_EXCERPTS
        for excerpt in excerpts:
            assert excerpt in text
            assert excerpt == excerpt.strip()


class TestParseSummary:
    """Test splitting a summary response"""

    def test_both_sections(self):
        response = (
            "SUMMARY:\nThe paper studies X.\n\nIt finds Y.\n\n"
            "KEY POINTS:\n- First point\n-Second point\n  - Third point  \n"
        )
        result = ResponseParser.parse_summary(response)

        assert isinstance(result, SummaryParseResult)
        assert result.summary == "The paper studies X.\n\nIt finds Y."
        assert result.key_points == ["First point", "Second point", "Third point"]

    def test_lines_without_dash_are_ignored(self):
        response = "SUMMARY:\nShort.\nKEY POINTS:\n* starred\n1. numbered\n- kept"
        assert ResponseParser.parse_summary(response).key_points == ["kept"]

    def test_no_markers_uses_whole_response(self):
        response = "Just a paragraph of prose."
        result = ResponseParser.parse_summary(response)

        assert result.summary == response
        assert result.key_points == [ResponseParser.FALLBACK_KEY_POINT]

    def test_summary_without_key_points(self):
        result = ResponseParser.parse_summary("SUMMARY:\nOnly a summary here.")

        assert result.summary == "Only a summary here."
        assert result.key_points == ["Summary provided above"]

    def test_empty_summary_falls_back_to_whole_response(self):
        response = "SUMMARY:\n\nKEY POINTS:\n- A point"
        result = ResponseParser.parse_summary(response)

        assert result.summary == response
        assert result.key_points == ["A point"]

    @given(st.text(max_size=300))
    def test_never_fails(self, response):
        """Property: parsing always yields a summary and at least one key point"""
        result = ResponseParser.parse_summary(response)
        assert len(result.key_points) >= 1
        assert isinstance(result.summary, str)


class TestLLMClientProvider:
    """Test client ownership and rebuild"""

    @patch("services.llm_service.OpenAI")
    def test_client_built_once(self, mock_openai, credential_store):
        provider = LLMClientProvider(credential_store, base_url="http://localhost/v1")

        assert not provider.is_built
        first = provider.get_client()
        second = provider.get_client()

        assert first is second
        assert provider.is_built
        mock_openai.assert_called_once_with(api_key="env-key", base_url="http://localhost/v1")

    @patch("services.llm_service.OpenAI")
    def test_invalidate_rebuilds_with_new_credential(self, mock_openai, credential_store):
        provider = LLMClientProvider(credential_store)
        provider.get_client()

        credential_store.set_credential("new-key")
        provider.invalidate()
        provider.get_client()

        assert mock_openai.call_count == 2
        assert mock_openai.call_args.kwargs["api_key"] == "new-key"

    @patch("services.llm_service.OpenAI")
    def test_missing_credential(self, mock_openai, kv_store):
        provider = LLMClientProvider(CredentialStore(store=kv_store))

        with pytest.raises(GenerationFailedError, match="API key must be set"):
            provider.get_client()
        mock_openai.assert_not_called()


class TestLLMService:
    """Test LLM service functionality"""

    @pytest.fixture
    def mock_openai(self):
        with patch("services.llm_service.OpenAI") as mock_openai:
            yield mock_openai

    @pytest.fixture
    def service(self, mock_openai, credential_store):
        return LLMService(credential_store=credential_store, model="test-model")

    def _create(self, mock_openai):
        return mock_openai.return_value.chat.completions.create

    def test_translate_returns_text_verbatim(self, service, mock_openai, completion):
        self._create(mock_openai).return_value = completion("  Xin chào thế giới  ")

        result = service.translate("Hello world", "English", "Vietnamese")

        assert result == "  Xin chào thế giới  "
        call_kwargs = self._create(mock_openai).call_args.kwargs
        assert call_kwargs["model"] == "test-model"
        assert call_kwargs["messages"][0]["role"] == "user"
        assert "Hello world" in call_kwargs["messages"][0]["content"]

    def test_none_content_becomes_empty_string(self, service, mock_openai, completion):
        self._create(mock_openai).return_value = completion(None)
        assert service.translate("Hello", "English", "French") == ""

    def test_answer_question(self, service, mock_openai, completion):
        self._create(mock_openai).return_value = completion("It reaches 95% accuracy.")

        result = service.answer_question(DOCUMENT, "accuracy")

        assert isinstance(result, QAResult)
        assert result.answer == "It reaches 95% accuracy."
        assert result.excerpts == [
            "The model achieves 95% accuracy on the test set.",
            "Accuracy improves further with more data.",
        ]

    def test_answer_question_full_sentence_question(self, service, mock_openai, completion):
        self._create(mock_openai).return_value = completion("The model reaches 95% accuracy.")

        result = service.answer_question(DOCUMENT, "What is the accuracy?")

        assert result.answer == "The model reaches 95% accuracy."
        assert "The model achieves 95% accuracy on the test set." in result.excerpts
        assert len(result.excerpts) <= 3

    def test_answer_question_caps_excerpts_at_three(self, service, mock_openai, completion):
        self._create(mock_openai).return_value = completion("Cats.")
        text = " ".join(f"Fact {i} about cats." for i in range(6))

        result = service.answer_question(text, "cats")

        assert result.excerpts == ["Fact 0 about cats.", "Fact 1 about cats.", "Fact 2 about cats."]

    def test_summarize(self, service, mock_openai, completion):
        self._create(mock_openai).return_value = completion(
            "SUMMARY:\nA short summary.\n\nKEY POINTS:\n- One\n- Two"
        )

        result = service.summarize(DOCUMENT, SummaryLength.BRIEF)

        assert result.summary == "A short summary."
        assert result.key_points == ["One", "Two"]
        assert "150-200 words" in self._create(mock_openai).call_args.kwargs["messages"][0]["content"]

    def test_remote_error_becomes_generation_failed(self, service, mock_openai):
        self._create(mock_openai).side_effect = RuntimeError("quota exceeded")

        with pytest.raises(GenerationFailedError) as exc_info:
            service.summarize(DOCUMENT)

        error = exc_info.value
        assert error.error_code == ErrorCode.GENERATION_FAILED
        assert "quota exceeded" in error.message
        assert error.details["task"] == "summarize"
        assert error.details["model_name"] == "test-model"

    def test_no_retry_on_failure(self, service, mock_openai):
        self._create(mock_openai).side_effect = RuntimeError("boom")

        with pytest.raises(GenerationFailedError):
            service.translate("Hello", "English", "French")
        assert self._create(mock_openai).call_count == 1

    def test_missing_credential_fails_generation(self, mock_openai, kv_store):
        service = LLMService(credential_store=CredentialStore(store=kv_store))

        with pytest.raises(GenerationFailedError):
            service.translate("Hello", "English", "French")

    def test_validate_credential(self, service, mock_openai, completion):
        self._create(mock_openai).return_value = completion("ok")
        assert service.validate_credential() is True
        assert self._create(mock_openai).call_args.kwargs["messages"][0]["content"] == "test"

    def test_validate_credential_empty_response(self, service, mock_openai, completion):
        self._create(mock_openai).return_value = completion("")
        assert service.validate_credential() is False

    def test_validate_credential_never_raises(self, service, mock_openai):
        self._create(mock_openai).side_effect = RuntimeError("invalid key")
        assert service.validate_credential() is False

    def test_validate_credential_without_key(self, mock_openai, kv_store):
        service = LLMService(credential_store=CredentialStore(store=kv_store))
        assert service.validate_credential() is False

    def test_credential_change_takes_effect_after_reset(self, service, mock_openai, credential_store, completion):
        self._create(mock_openai).return_value = completion("ok")
        service.translate("Hello", "English", "French")
        assert mock_openai.call_args.kwargs["api_key"] == "env-key"

        credential_store.set_credential("new-key")
        service.reset_client()
        service.translate("Hello", "English", "French")

        assert mock_openai.call_args.kwargs["api_key"] == "new-key"

    def test_is_available(self, mock_openai, kv_store):
        store = CredentialStore(store=kv_store)
        service = LLMService(credential_store=store)

        assert service.is_available() is False
        store.set_credential("k")
        assert service.is_available() is True

    def test_model_info(self, service):
        info = service.get_model_info()

        assert info["model"] == "test-model"
        assert info["available"] == "True"
        assert info["base_url"].startswith("https://")

    def test_injected_provider_is_used(self, completion):
        provider = Mock()
        provider.get_client.return_value.chat.completions.create.return_value = completion("done")
        service = LLMService(credential_store=Mock(), model="m", client_provider=provider)

        assert service.translate("a", "English", "French") == "done"
        service.reset_client()
        provider.invalidate.assert_called_once()
