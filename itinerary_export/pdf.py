"""PDF encoding for laid-out itinerary pages."""
from __future__ import annotations

import logging
from typing import Sequence

from fpdf import FPDF

from .errors import ExportError
from .layout import PDF_ENCODING, PAGE_HEIGHT, PAGE_WIDTH, pdf_text
from .pages import Page, RuleCommand, TextCommand

logger = logging.getLogger(__name__)


def _draw_text(pdf: FPDF, command: TextCommand) -> None:
    style = command.style
    pdf.set_font("Helvetica", "B" if style.bold else "", style.size)
    pdf.set_text_color(*style.color)
    for index, line in enumerate(command.lines):
        text = pdf_text(line)
        if not text:
            continue
        x = command.x
        if command.align == "C":
            x -= pdf.get_string_width(text) / 2
        pdf.text(x, command.y + index * command.line_height, text)


def _draw_rule(pdf: FPDF, command: RuleCommand) -> None:
    pdf.set_draw_color(*command.color)
    pdf.set_line_width(command.width)
    pdf.line(command.x1, command.y, command.x2, command.y)


def encode_pdf(pages: Sequence[Page], title: str = "") -> bytes:
    """Create a PDF (as bytes) from stamped pages."""
    pdf = FPDF(unit="mm", format=(PAGE_WIDTH, PAGE_HEIGHT))
    pdf.core_fonts_encoding = PDF_ENCODING
    pdf.set_auto_page_break(auto=False)
    if title:
        pdf.set_title(pdf_text(title))

    try:
        for page in pages:
            pdf.add_page()
            for command in page.commands:
                if isinstance(command, TextCommand):
                    _draw_text(pdf, command)
                else:
                    _draw_rule(pdf, command)
            if page.footer is not None:
                _draw_text(pdf, page.footer)
        raw_pdf = pdf.output()
    except Exception as exc:
        logger.exception("PDF encoding failed")
        raise ExportError("Failed to generate PDF.") from exc

    logger.debug("Encoded %d page(s) into %d bytes of PDF", len(pages), len(raw_pdf))
    return bytes(raw_pdf)
