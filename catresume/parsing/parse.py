from __future__ import annotations

import logging
from pathlib import Path

from pypdf import PdfReader

logger = logging.getLogger(__name__)


class PDFExtractionError(ValueError):
    pass


def extract_pdf_text(file_path: str | Path) -> str:
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"Input document not found: '{path}'")

    try:
        reader = PdfReader(str(path))
        text_parts: list[str] = []
        for page in reader.pages:
            page_text = (page.extract_text() or "").strip()
            if page_text:
                text_parts.append(page_text)
    except Exception as exc:
        raise PDFExtractionError("Unable to extract text from this PDF file.") from exc

    if not text_parts:
        logger.warning("pdf_no_extractable_text file=%s pages=%s", path.name, len(reader.pages))
    text = "\n".join(text_parts)
    logger.info("pdf_text_extracted file=%s pages=%s chars=%s", path.name, len(reader.pages), len(text))
    return text
