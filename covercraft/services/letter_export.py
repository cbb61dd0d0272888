"""Render cover letter text into downloadable PDF and DOCX documents.

The exporters are pure functions of the letter text: no storage, no request
state. Both lay out one paragraph per non-blank input line.
"""
from __future__ import annotations

from io import BytesIO
from typing import Dict, List
from urllib.parse import quote
import re
import unicodedata

from docx import Document
from docx.shared import Pt
from jinja2 import Environment, select_autoescape

from covercraft.tools.pdf_generator import create_pdf

PDF_FONT = "Helvetica"
PDF_FONT_SIZE_PT = 12
PDF_PAGE_SIZE = "A4"
PDF_MARGIN_MM = 15
PDF_TEXT_WIDTH_MM = 180

DOCX_FONT = "Calibri"
DOCX_FONT_SIZE = Pt(12)
DOCX_SPACE_AFTER = Pt(10)

MAX_FILENAME_LENGTH = 100
_UNSAFE_FILENAME_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1f]')

LETTER_TEMPLATE = """<!DOCTYPE html>
<html>
<head><meta charset="utf-8"><title>{{ title }}</title></head>
<body>
<div class="letter">
{% for block in blocks %}<p class="line{% if block.gap %} gap{% endif %}">{{ block.text }}</p>
{% endfor %}</div>
</body>
</html>
"""

LETTER_STYLES = f"""
@page {{ size: {PDF_PAGE_SIZE}; margin: 20mm {PDF_MARGIN_MM}mm; }}
body {{ font-family: {PDF_FONT}, Arial, sans-serif; font-size: {PDF_FONT_SIZE_PT}pt; line-height: 1.35; }}
.letter {{ width: {PDF_TEXT_WIDTH_MM}mm; }}
p.line {{ margin: 0; white-space: pre-wrap; overflow-wrap: break-word; }}
p.line.gap {{ margin-bottom: {PDF_FONT_SIZE_PT}pt; }}
"""


def _get_env() -> Environment:
    return Environment(autoescape=select_autoescape(["html", "xml"]))


def letter_lines(content: str) -> List[str]:
    """The non-blank lines of a letter, in order."""
    return [line for line in (content or "").splitlines() if line.strip()]


def _letter_blocks(content: str) -> List[Dict[str, object]]:
    # A blank line after a line becomes extra spacing below it
    raw = (content or "").splitlines()
    blocks = []
    for index, line in enumerate(raw):
        if not line.strip():
            continue
        following = raw[index + 1] if index + 1 < len(raw) else ""
        blocks.append({"text": line, "gap": not following.strip()})
    return blocks


def render_letter_html(content: str, title: str = "Cover Letter") -> str:
    template = _get_env().from_string(LETTER_TEMPLATE)
    return template.render(title=title, blocks=_letter_blocks(content))


def export_pdf(content: str, title: str = "Cover Letter") -> bytes:
    """A4 PDF, fixed font and text width, wrapped and paginated by the renderer."""
    return create_pdf(render_letter_html(content, title), LETTER_STYLES)


def export_docx(content: str) -> bytes:
    """DOCX with one paragraph per non-blank line."""
    document = Document()
    normal = document.styles["Normal"]
    normal.font.name = DOCX_FONT
    normal.font.size = DOCX_FONT_SIZE

    for line in letter_lines(content):
        paragraph = document.add_paragraph()
        run = paragraph.add_run(line)
        run.font.name = DOCX_FONT
        run.font.size = DOCX_FONT_SIZE
        paragraph.paragraph_format.space_after = DOCX_SPACE_AFTER

    buffer = BytesIO()
    document.save(buffer)
    return buffer.getvalue()


def sanitize_filename(name: str) -> str:
    cleaned = re.sub(r"\s+", " ", (name or "").strip())
    cleaned = _UNSAFE_FILENAME_CHARS.sub("", cleaned)
    cleaned = cleaned.strip(" .")
    return cleaned[:MAX_FILENAME_LENGTH] or "Unknown"


def export_filename(label: str, extension: str) -> str:
    return f"{sanitize_filename(label)} Cover Letter.{extension}"


def content_disposition(label: str, extension: str) -> str:
    """Attachment header value with an ASCII filename and, when needed, an RFC 5987 UTF-8 one."""
    filename = export_filename(label, extension)
    ascii_label = unicodedata.normalize("NFKD", sanitize_filename(label)).encode("ascii", "ignore").decode("ascii")
    ascii_filename = export_filename(ascii_label, extension)

    if ascii_filename == filename:
        return f'attachment; filename="{filename}"'
    return f"attachment; filename=\"{ascii_filename}\"; filename*=UTF-8''{quote(filename)}"
