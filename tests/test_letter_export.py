"""
Test the PDF/DOCX letter exporters and export filenames
"""

from io import BytesIO
from urllib.parse import unquote
from unittest.mock import patch

import docx

from covercraft.services.letter_export import (
    LETTER_STYLES,
    MAX_FILENAME_LENGTH,
    PDF_TEXT_WIDTH_MM,
    content_disposition,
    export_docx,
    export_filename,
    export_pdf,
    letter_lines,
    render_letter_html,
    sanitize_filename,
)

LETTER = """Hiring Manager
Acme Corp

Dear Hiring Manager,

I build reliable systems.

Sincerely,
Jane Doe
"""


def test_letter_lines_skips_blank_lines():
    assert letter_lines(LETTER) == [
        "Hiring Manager",
        "Acme Corp",
        "Dear Hiring Manager,",
        "I build reliable systems.",
        "Sincerely,",
        "Jane Doe",
    ]


def test_docx_has_one_paragraph_per_non_blank_line():
    for _ in range(2):
        document = docx.Document(BytesIO(export_docx(LETTER)))
        texts = [p.text for p in document.paragraphs]

        assert texts == letter_lines(LETTER)


def test_html_has_one_paragraph_per_non_blank_line():
    html = render_letter_html(LETTER)

    assert html.count("<p ") == len(letter_lines(LETTER))


def test_html_escapes_letter_text():
    html = render_letter_html("Skills: <script>alert(1)</script> & more")

    assert "<script>" not in html
    assert "&lt;script&gt;" in html


def test_export_pdf_renders_letter_html():
    with patch("covercraft.services.letter_export.create_pdf", return_value=b"%PDF-1.7") as create_pdf:
        assert export_pdf(LETTER) == b"%PDF-1.7"

    html, css = create_pdf.call_args.args
    assert html.count("<p ") == 6
    assert "A4" in css


def test_sanitize_filename():
    assert sanitize_filename('  Jane   "JD" Doe/Smith?  ') == "Jane JD DoeSmith"
    assert sanitize_filename("...") == "Unknown"
    assert sanitize_filename("") == "Unknown"
    assert len(sanitize_filename("x" * 300)) == MAX_FILENAME_LENGTH


def test_export_filename():
    assert export_filename("Jane Doe", "pdf") == "Jane Doe Cover Letter.pdf"
    assert export_filename("", "docx") == "Unknown Cover Letter.docx"


def test_content_disposition_plain_ascii_label():
    assert content_disposition("Jane Doe", "pdf") == 'attachment; filename="Jane Doe Cover Letter.pdf"'


def test_content_disposition_non_ascii_label():
    """Non-Latin labels get an ASCII fallback plus a UTF-8 filename* parameter"""
    header = content_disposition("李雷", "docx")

    header.encode("latin-1")
    assert 'filename="Unknown Cover Letter.docx"' in header
    encoded = header.split("filename*=UTF-8''", 1)[1]
    assert unquote(encoded) == "李雷 Cover Letter.docx"


def test_content_disposition_strips_accents_for_fallback():
    header = content_disposition("José Núñez", "pdf")

    assert 'filename="Jose Nunez Cover Letter.pdf"' in header
    assert unquote(header.split("UTF-8''", 1)[1]) == "José Núñez Cover Letter.pdf"


def test_letter_styles_fix_text_width_and_wrap():
    """Layout the PDF renderer relies on for wrapping and pagination"""
    assert "size: A4" in LETTER_STYLES
    assert f"width: {PDF_TEXT_WIDTH_MM}mm" in LETTER_STYLES
    assert PDF_TEXT_WIDTH_MM == 180
    assert "overflow-wrap: break-word" in LETTER_STYLES
    assert "white-space: pre-wrap" in LETTER_STYLES
    assert "Helvetica" in LETTER_STYLES and "12pt" in LETTER_STYLES


def test_rendered_html_wraps_lines_in_fixed_width_block():
    html = render_letter_html("x" * 500 + "\nSecond line")

    assert '<div class="letter">' in html
    assert html.count('<p class="line') == 2
    assert "x" * 500 in html
