"""Utilities for extracting resume text from PDF files and email attachments."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

import pymupdf
import pymupdf4llm
import structlog

from .schemas import Attachment

_TEXT_SUFFIXES: tuple[str, ...] = (".txt", ".md", ".markdown")


def extract_markdown(pdf_path: str | Path) -> str:
    """Return markdown text extracted from a PDF file."""

    pdf_path = Path(pdf_path)
    if not pdf_path.exists():
        raise FileNotFoundError(pdf_path)

    return pymupdf4llm.to_markdown(str(pdf_path))


def extract_pdf_bytes(content: bytes) -> str:
    """Return markdown text for an in-memory PDF."""
    with pymupdf.open(stream=content, filetype="pdf") as document:
        return pymupdf4llm.to_markdown(document)


def is_pdf(attachment: Attachment) -> bool:
    if attachment.content_type and attachment.content_type.lower() == "application/pdf":
        return True
    return attachment.filename.lower().endswith(".pdf")


def is_text(attachment: Attachment) -> bool:
    if attachment.content_type and attachment.content_type.lower().startswith("text/"):
        return True
    return attachment.filename.lower().endswith(_TEXT_SUFFIXES)


def extract_attachment_text(attachment: Attachment) -> str | None:
    """Return text for PDF and plain-text attachments; None for anything else.

    A PDF that pymupdf cannot open or convert is logged and treated as unreadable.
    """
    if not attachment.content:
        return None
    if is_pdf(attachment):
        try:
            return extract_pdf_bytes(attachment.content)
        except (RuntimeError, ValueError) as exc:
            # pymupdf.FileDataError and EmptyFileError are RuntimeError subclasses.
            structlog.get_logger(__name__).warning(
                "pdf.extract_failed",
                filename=attachment.filename,
                error_type=type(exc).__name__,
                error=str(exc),
            )
            return None
    if is_text(attachment):
        return attachment.content.decode("utf-8", errors="replace")
    return None


def resolve_resume_text(attachments: Iterable[Attachment], body: str) -> str:
    """Use the first readable attachment, falling back to the email body."""
    for attachment in attachments:
        text = extract_attachment_text(attachment)
        if text and text.strip():
            return text
    return body or ""


__all__ = [
    "extract_attachment_text",
    "extract_markdown",
    "extract_pdf_bytes",
    "resolve_resume_text",
]
