"""
Test Configuration and Fixtures
"""
import io
import os
import tempfile

# Settings are read once at import time; point them at a throwaway state file
# and make sure no real key or access code leaks in from the environment.
os.environ["STATE_FILE"] = os.path.join(tempfile.mkdtemp(), "state.json")
os.environ.pop("GEMINI_API_KEY", None)
os.environ.pop("ACCESS_CODE", None)
os.environ["LOG_FORMAT"] = "simple"

import pytest
from unittest.mock import Mock
from reportlab.pdfgen import canvas

from services.credential_store import CredentialStore, KeyValueStore


def make_pdf(pages):
    """Build a PDF with one line of text per page"""
    buffer = io.BytesIO()
    pdf = canvas.Canvas(buffer)
    pdf.setTitle("Test Document")
    for text in pages:
        pdf.drawString(72, 720, text)
        pdf.showPage()
    pdf.save()
    return buffer.getvalue()


def make_completion(text):
    """Shape of an OpenAI chat completion response"""
    response = Mock()
    response.choices = [Mock()]
    response.choices[0].message.content = text
    return response


@pytest.fixture
def pdf_factory():
    return make_pdf


@pytest.fixture
def completion():
    return make_completion


@pytest.fixture
def sample_pdf():
    return make_pdf(["Page one text", "Page two text", "Page three text"])


@pytest.fixture
def kv_store(tmp_path):
    return KeyValueStore(str(tmp_path / "state.json"))


@pytest.fixture
def credential_store(kv_store):
    return CredentialStore(store=kv_store, fallback_credential="env-key")
