from __future__ import annotations

import logging
import re
import time
import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

logger = logging.getLogger(__name__)

PDF_CONTENT_TYPE = "application/pdf"
PDF_MAGIC = b"%PDF-"

_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def validate_pdf_upload(*, filename: str, content_type: str | None, content: bytes, max_bytes: int) -> None:
    media_type = (content_type or "").split(";")[0].strip().lower()
    if media_type != PDF_CONTENT_TYPE:
        raise ValueError("Only PDF files are allowed.")
    if not content:
        raise ValueError("Uploaded file is empty.")
    if len(content) > max_bytes:
        raise ValueError(f"File too large. Maximum allowed size is {max_bytes // (1024 * 1024)} MB.")
    if not content.startswith(PDF_MAGIC):
        raise ValueError(f"File signature of '{filename}' does not match .pdf content.")


def safe_upload_name(filename: str | None) -> str:
    name = Path(filename or "").name
    stem = _UNSAFE_FILENAME_CHARS.sub("_", Path(name).stem).strip("._")[:80]
    return f"{stem or 'resume'}.pdf"


def unique_upload_path(upload_dir: str | Path, filename: str | None) -> Path:
    millis = int(time.time() * 1000)
    return Path(upload_dir) / f"{millis}-{uuid.uuid4().hex[:12]}-{safe_upload_name(filename)}"


def remove_upload(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
    except OSError as exc:
        logger.warning("upload_cleanup_failed path=%s: %s", path, exc)


@contextmanager
def temporary_upload(content: bytes, filename: str | None, upload_dir: str | Path) -> Iterator[Path]:
    """Write ``content`` to a uniquely named file that is removed on exit, even on error."""
    directory = Path(upload_dir)
    directory.mkdir(parents=True, exist_ok=True)
    path = unique_upload_path(directory, filename)
    path.write_bytes(content)
    try:
        yield path
    finally:
        remove_upload(path)


def purge_stale_uploads(upload_dir: str | Path, max_age_minutes: int) -> int:
    directory = Path(upload_dir)
    if not directory.is_dir():
        return 0
    cutoff = time.time() - max_age_minutes * 60
    removed = 0
    for path in directory.glob("*.pdf"):
        try:
            if path.stat().st_mtime >= cutoff:
                continue
            path.unlink()
            removed += 1
        except OSError as exc:
            logger.warning("upload_purge_failed path=%s: %s", path, exc)
    return removed
