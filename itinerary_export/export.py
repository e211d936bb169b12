"""Single entry point for downloading an itinerary in any supported format."""
from __future__ import annotations

import logging
import os
import re
import tempfile
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Optional, Tuple, Union

from .errors import ExportError
from .flow import render_flow
from .models import DEFAULT_DESTINATION, Itinerary, resolve_destination
from .pages import render_pages
from .pdf import encode_pdf
from .text import render_text
from .word import encode_docx

logger = logging.getLogger(__name__)


class ExportFormat(str, Enum):
    TEXT = "text"
    PDF = "pdf"
    DOCX = "docx"

    @property
    def extension(self) -> str:
        return {"text": "txt", "pdf": "pdf", "docx": "docx"}[self.value]

    @property
    def mime_type(self) -> str:
        return {
            "text": "text/plain;charset=utf-8",
            "pdf": "application/pdf",
            "docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        }[self.value]

    @property
    def label(self) -> str:
        return {"text": "Plain Text", "pdf": "PDF Document", "docx": "Word Document"}[self.value]


@dataclass(frozen=True)
class NamedPayload:
    filename: str
    mime_type: str
    data: bytes


SaveFn = Callable[[NamedPayload], object]


def build_filename(destination: Optional[str], fmt: ExportFormat) -> str:
    slug = re.sub(r"\s+", "_", (destination or "").strip().lower())
    slug = re.sub(r"[^\w.-]", "", slug).strip(".")
    return f"{slug or DEFAULT_DESTINATION.lower()}-itinerary.{fmt.extension}"


def _encode(itinerary: Itinerary, destination: str, fmt: ExportFormat) -> bytes:
    # Renderer errors propagate unwrapped; only encoder failures become ExportError.
    title = f"{destination} Itinerary"
    if fmt is ExportFormat.TEXT:
        return render_text(itinerary, destination).encode("utf-8")
    if fmt is ExportFormat.PDF:
        pages = render_pages(itinerary, destination)
        return _guarded(lambda: encode_pdf(pages, title=title))
    blocks = render_flow(itinerary, destination)
    return _guarded(lambda: encode_docx(blocks, title=title))


def _guarded(action: Callable[[], Any]) -> Any:
    try:
        return action()
    except ExportError:
        raise
    except Exception as exc:
        raise ExportError(str(exc)) from exc


def export_itinerary(
    itinerary: Optional[Itinerary],
    destination: Optional[str],
    fmt: Union[ExportFormat, str],
    save: Optional[SaveFn] = None,
) -> Tuple[Optional[NamedPayload], Optional[str]]:
    """Render ``itinerary`` in one format and optionally hand it to ``save``.

    Returns ``(payload, None)`` on success and ``(None, message)`` when the
    document could not be encoded or saved. A missing itinerary is a no-op
    and returns ``(None, None)``.
    """
    if itinerary is None:
        return None, None

    fmt = ExportFormat(fmt)
    destination = resolve_destination(destination)

    try:
        data = _encode(itinerary, destination, fmt)
        payload = NamedPayload(build_filename(destination, fmt), fmt.mime_type, data)
        if save is not None:
            _guarded(lambda: save(payload))
    except ExportError as exc:
        logger.error("Export to %s failed: %s", fmt.value, exc)
        return None, f"Failed to generate {fmt.label}. Please try again."

    logger.info("Exported %s (%d bytes)", payload.filename, len(payload.data))
    return payload, None


def save_to_directory(directory: Union[str, Path]) -> SaveFn:
    """Return a save function that writes payloads atomically into ``directory``."""
    target_dir = Path(directory)

    def _save(payload: NamedPayload) -> Path:
        target_dir.mkdir(parents=True, exist_ok=True)
        target = target_dir / payload.filename
        fd, tmp_name = tempfile.mkstemp(dir=target_dir, prefix=".", suffix=".part")
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(payload.data)
            os.replace(tmp_name, target)
        except OSError:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
        return target

    return _save
