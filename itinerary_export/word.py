"""Word (.docx) encoding for flow-document blocks."""
from __future__ import annotations

import io
import logging
from typing import Sequence

from docx import Document
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import Pt, RGBColor

from .errors import ExportError
from .flow import BlockRole, Border, StyledBlock, StyledRun

logger = logging.getLogger(__name__)

# Elements that must follow w:pBdr inside w:pPr
_PBDR_SUCCESSORS = (
    "w:shd", "w:tabs", "w:suppressAutoHyphens", "w:kinsoku", "w:wordWrap",
    "w:overflowPunct", "w:topLinePunct", "w:autoSpaceDE", "w:autoSpaceDN",
    "w:bidi", "w:adjustRightInd", "w:snapToGrid", "w:spacing", "w:ind",
    "w:contextualSpacing", "w:mirrorIndents", "w:suppressOverlap", "w:jc",
    "w:textDirection", "w:textAlignment", "w:textboxTightWrap",
    "w:outlineLvl", "w:divId", "w:cnfStyle", "w:rPr", "w:sectPr",
    "w:pPrChange",
)


def _add_bottom_border(paragraph, border: Border) -> None:
    p_pr = paragraph._p.get_or_add_pPr()
    borders = OxmlElement("w:pBdr")
    bottom = OxmlElement("w:bottom")
    bottom.set(qn("w:val"), border.style)
    bottom.set(qn("w:sz"), str(border.size))
    bottom.set(qn("w:space"), str(border.space))
    bottom.set(qn("w:color"), border.color)
    borders.append(bottom)
    p_pr.insert_element_before(borders, *_PBDR_SUCCESSORS)


def _add_run(paragraph, styled: StyledRun) -> None:
    run = paragraph.add_run(styled.text)
    if styled.bold:
        run.bold = True
    if styled.italics:
        run.italic = True
    if styled.size:
        run.font.size = Pt(styled.size / 2)
    if styled.color:
        run.font.color.rgb = RGBColor.from_string(styled.color)


def _add_block(document, block: StyledBlock) -> None:
    if block.role is BlockRole.TITLE:
        paragraph = document.add_heading("", 0)
    elif block.role is BlockRole.HEADING_1:
        paragraph = document.add_heading("", 1)
    else:
        paragraph = document.add_paragraph()

    if block.bottom_border is not None:
        _add_bottom_border(paragraph, block.bottom_border)
    if block.spacing_before:
        paragraph.paragraph_format.space_before = Pt(block.spacing_before / 20)
    if block.spacing_after:
        paragraph.paragraph_format.space_after = Pt(block.spacing_after / 20)
    for styled in block.runs:
        _add_run(paragraph, styled)


def encode_docx(blocks: Sequence[StyledBlock], title: str = "") -> bytes:
    """Create a .docx file (as bytes) from styled blocks."""
    try:
        document = Document()
        if title:
            document.core_properties.title = title
        for block in blocks:
            _add_block(document, block)
        buffer = io.BytesIO()
        document.save(buffer)
    except Exception as exc:
        logger.exception("DOCX encoding failed")
        raise ExportError("Failed to generate DOCX.") from exc

    data = buffer.getvalue()
    logger.debug("Encoded %d block(s) into %d bytes of DOCX", len(blocks), len(data))
    return data
