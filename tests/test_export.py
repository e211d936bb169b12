import io
import os

import pytest
from docx import Document
from docx.oxml.ns import qn

from itinerary_export import export as export_module
from itinerary_export.errors import ExportError
from itinerary_export.export import (
    ExportFormat,
    NamedPayload,
    build_filename,
    export_itinerary,
    save_to_directory,
)
from itinerary_export.models import Itinerary
from itinerary_export.text import render_text


@pytest.mark.parametrize(
    "destination, fmt, expected",
    [
        ("Paris", ExportFormat.TEXT, "paris-itinerary.txt"),
        ("New  York City", ExportFormat.PDF, "new_york_city-itinerary.pdf"),
        ("São Paulo!", ExportFormat.DOCX, "são_paulo-itinerary.docx"),
        ("../etc/passwd", ExportFormat.TEXT, "etcpasswd-itinerary.txt"),
        ("", ExportFormat.PDF, "trip-itinerary.pdf"),
        (None, ExportFormat.TEXT, "trip-itinerary.txt"),
        ("🌍", ExportFormat.DOCX, "trip-itinerary.docx"),
    ],
)
def test_build_filename(destination, fmt, expected):
    assert build_filename(destination, fmt) == expected


def test_missing_itinerary_is_a_no_op():
    calls = []
    assert export_itinerary(None, "Paris", ExportFormat.PDF, save=calls.append) == (None, None)
    assert calls == []


def test_text_export(paris_itinerary):
    payload, error = export_itinerary(paris_itinerary, "Paris", "text")
    assert error is None
    assert payload.filename == "paris-itinerary.txt"
    assert payload.mime_type.startswith("text/plain")
    assert payload.data == render_text(paris_itinerary, "Paris").encode("utf-8")


def test_blank_destination_uses_placeholder(paris_itinerary):
    payload, _ = export_itinerary(paris_itinerary, "", ExportFormat.TEXT)
    assert payload.filename == "trip-itinerary.txt"
    assert payload.data.startswith(b"Trip Itinerary\n")


def test_pdf_export(paris_itinerary):
    payload, error = export_itinerary(paris_itinerary, "Paris", ExportFormat.PDF)
    assert error is None
    assert payload.filename == "paris-itinerary.pdf"
    assert payload.mime_type == "application/pdf"
    assert payload.data.startswith(b"%PDF")


def test_pdf_export_with_paragraph_breaks():
    itinerary = Itinerary.model_validate(
        {
            "days": [
                {
                    "day": 1,
                    "activities": [
                        {"time": "9", "place": "Pier", "description": "One.\n\nTwo.", "coordinates": [0, 0]}
                    ],
                }
            ]
        }
    )
    payload, error = export_itinerary(itinerary, "Bergen", ExportFormat.PDF)
    assert error is None
    assert payload.data.startswith(b"%PDF")


def test_pdf_export_of_empty_itinerary(empty_itinerary):
    payload, error = export_itinerary(empty_itinerary, None, ExportFormat.PDF)
    assert error is None
    assert payload.data.startswith(b"%PDF")


def test_docx_export_reopens(paris_itinerary):
    payload, error = export_itinerary(paris_itinerary, "Paris", ExportFormat.DOCX)
    assert error is None
    assert payload.filename == "paris-itinerary.docx"

    document = Document(io.BytesIO(payload.data))
    texts = [paragraph.text for paragraph in document.paragraphs]
    assert "🌍 Paris Itinerary" in texts
    assert "    • Champ de Mars (park)" in texts

    headings = [paragraph for paragraph in document.paragraphs if paragraph.style.name == "Heading 1"]
    assert [paragraph.text for paragraph in headings] == ["Day 1", "Day 2"]
    assert headings[0]._p.pPr.find(qn("w:pBdr")) is not None

    bullet = next(paragraph for paragraph in document.paragraphs if paragraph.text.endswith("(park)"))
    assert len(bullet.runs) == 2
    assert str(bullet.runs[1].font.color.rgb) == "3B82F6"


def test_save_receives_payload(paris_itinerary):
    saved = []
    payload, error = export_itinerary(paris_itinerary, "Paris", ExportFormat.TEXT, save=saved.append)
    assert error is None
    assert saved == [payload]


def test_encoder_failure_is_reported(paris_itinerary, monkeypatch):
    def broken(pages, title=""):
        raise RuntimeError("encoder exploded")

    monkeypatch.setattr(export_module, "encode_pdf", broken)
    saved = []
    payload, error = export_itinerary(paris_itinerary, "Paris", ExportFormat.PDF, save=saved.append)
    assert payload is None
    assert error == "Failed to generate PDF Document. Please try again."
    assert saved == []


def test_docx_encoder_error_is_reported(paris_itinerary, monkeypatch):
    def broken(blocks, title=""):
        raise ExportError("Failed to generate DOCX.")

    monkeypatch.setattr(export_module, "encode_docx", broken)
    payload, error = export_itinerary(paris_itinerary, "Paris", ExportFormat.DOCX)
    assert payload is None
    assert error == "Failed to generate Word Document. Please try again."


def test_renderer_defects_propagate(paris_itinerary, monkeypatch):
    def broken(itinerary, destination=""):
        raise KeyError("time")

    monkeypatch.setattr(export_module, "render_text", broken)
    with pytest.raises(KeyError):
        export_itinerary(paris_itinerary, "Paris", ExportFormat.TEXT)


def test_unknown_format_rejected(paris_itinerary):
    with pytest.raises(ValueError):
        export_itinerary(paris_itinerary, "Paris", "rtf")


def test_save_to_directory_writes_file(paris_itinerary, tmp_path):
    payload, error = export_itinerary(
        paris_itinerary, "Paris", ExportFormat.TEXT, save=save_to_directory(tmp_path / "out")
    )
    assert error is None
    written = tmp_path / "out" / "paris-itinerary.txt"
    assert written.read_bytes() == payload.data
    assert os.listdir(tmp_path / "out") == ["paris-itinerary.txt"]


def test_failed_save_leaves_no_file(paris_itinerary, tmp_path, monkeypatch):
    def failing_replace(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr(export_module.os, "replace", failing_replace)
    payload, error = export_itinerary(
        paris_itinerary, "Paris", ExportFormat.TEXT, save=save_to_directory(tmp_path)
    )
    assert payload is None
    assert error == "Failed to generate Plain Text. Please try again."
    assert os.listdir(tmp_path) == []


def test_named_payload_is_immutable():
    payload = NamedPayload("a.txt", "text/plain", b"")
    with pytest.raises(AttributeError):
        payload.filename = "b.txt"
