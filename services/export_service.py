"""
Export of translation and summary results as plain text or Word documents
"""
import io
import logging
import re
from dataclasses import dataclass

from docx import Document
from docx.shared import Pt

from models.document import Page
from models.analysis import SummaryResult
from services.workspace import Workspace
from utils.exceptions import NoDocumentError, ValidationError

logger = logging.getLogger(__name__)

TEXT_MEDIA_TYPE = "text/plain; charset=utf-8"
DOCX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

DOCX_FONT = "Times New Roman"
DOCX_FONT_SIZE = Pt(12)
DOCX_SPACE_AFTER = Pt(12)

RULE = "=" * 50


@dataclass
class ExportArtifact:
    filename: str
    content: bytes
    media_type: str


def export_filename(title: str, extension: str) -> str:
    """'Translated Document' -> 'translated-document.<extension>'"""
    slug = re.sub(r'\s+', '-', title).lower()
    return f"{slug}.{extension}"


def to_text(content: str) -> bytes:
    return content.encode('utf-8')


def to_docx(content: str) -> bytes:
    """
    Build a Word document with one paragraph per blank-line separated block.

    Every paragraph is a single Times New Roman 12pt run with 12pt spacing after.
    """
    paragraphs = [p.strip() for p in content.split('\n\n')]

    document = Document()
    for text in paragraphs:
        if not text:
            continue
        paragraph = document.add_paragraph()
        run = paragraph.add_run(text)
        run.font.name = DOCX_FONT
        run.font.size = DOCX_FONT_SIZE
        paragraph.paragraph_format.space_after = DOCX_SPACE_AFTER

    buffer = io.BytesIO()
    document.save(buffer)
    return buffer.getvalue()


def render_summary(summary: SummaryResult, with_rules: bool = True) -> str:
    """Lay a summary out the way the downloads present it"""
    points = '\n'.join(f"• {point}" for point in summary.key_points)
    length = summary.summary_length.value
    if with_rules:
        return f"SUMMARY ({length})\n{RULE}\n\n{summary.summary}\n\n\nKEY POINTS\n{RULE}\n{points}"
    return f"SUMMARY ({length})\n\n{summary.summary}\n\nKEY POINTS\n\n{points}"


class ExportService:
    """Turns a page's current result into a downloadable file"""

    FORMATS = ("txt", "docx")

    def __init__(self, workspace: Workspace):
        self.workspace = workspace

    def export(self, page: Page, fmt: str = "txt") -> ExportArtifact:
        """
        Raises:
            ValidationError: If the format or page cannot be exported
            NoDocumentError: If the page has no result yet
        """
        if fmt not in self.FORMATS:
            raise ValidationError(
                message=f"Unsupported export format '{fmt}'",
                field_name="format",
                field_value=fmt,
                validation_rule="one of: " + ", ".join(self.FORMATS)
            )

        page = Page(page)
        session = self.workspace.get(page)

        if page == Page.TRANSLATE:
            if session.translation is None:
                raise NoDocumentError(page.value, "Nothing to export yet: translate the document first")
            title = "translated document"
            text = session.translation.translated_text
        elif page == Page.SUMMARIZE:
            if session.summary is None:
                raise NoDocumentError(page.value, "Nothing to export yet: summarize the document first")
            title = "summary"
            text = render_summary(session.summary, with_rules=(fmt == "txt"))
        else:
            raise ValidationError(
                message=f"The '{page.value}' page has no exportable result",
                field_name="page",
                field_value=page.value
            )

        if fmt == "docx":
            artifact = ExportArtifact(export_filename(title, "docx"), to_docx(text), DOCX_MEDIA_TYPE)
        else:
            artifact = ExportArtifact(export_filename(title, "txt"), to_text(text), TEXT_MEDIA_TYPE)

        logger.info(f"Exported {page.value} result as {artifact.filename} ({len(artifact.content)} bytes)")
        return artifact
