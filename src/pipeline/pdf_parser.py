"""Text extraction from uploaded résumé files."""

from io import BytesIO

from pypdf import PdfReader
from pypdf.errors import PyPdfError

from src.errors import ExtractionError

TEXT_SUFFIXES = (".txt", ".md")


def extract_text_from_pdf(data: bytes) -> str:
    """
    Extract text from PDF bytes.

    Raises:
        ExtractionError: The bytes are not a readable PDF.

    Note:
        Scanned PDFs (image-only) return minimal or empty text.
    """
    try:
        reader = PdfReader(BytesIO(data))
        text_parts = []
        for page in reader.pages:
            page_text = page.extract_text()
            if page_text:
                text_parts.append(page_text)
    except (PyPdfError, ValueError) as e:
        raise ExtractionError(f"Unreadable PDF: {e}") from e

    return "\n\n".join(text_parts).strip()


def extract_text(data: bytes, filename: str) -> str:
    """Dispatch on file suffix: PDFs via pypdf, plain text decoded as UTF-8."""
    name = (filename or "").lower()
    if name.endswith(".pdf"):
        return extract_text_from_pdf(data)
    if name.endswith(TEXT_SUFFIXES):
        return data.decode("utf-8", errors="replace").strip()
    raise ExtractionError(f"Unsupported résumé file type: {filename!r} (expected PDF or plain text)")
