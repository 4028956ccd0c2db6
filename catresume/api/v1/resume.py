import logging

from fastapi import APIRouter, File, Form, HTTPException, Request, UploadFile, status
from fastapi.responses import JSONResponse

from catresume.core.config import settings
from catresume.core.rate_limit import rate_limit
from catresume.parsing.parse import PDFExtractionError
from catresume.schemas.resume import ErrorResponse, ResumeAnalysisResponse
from catresume.services.resume_service import process_resume
from catresume.services.upload import temporary_upload, validate_pdf_upload

logger = logging.getLogger(__name__)

router = APIRouter()

MEDIA_MODES = {"image", "video"}
_READ_CHUNK_BYTES = 64 * 1024


async def _read_upload(file: UploadFile, max_bytes: int) -> bytes:
    chunks: list[bytes] = []
    total = 0
    while True:
        chunk = await file.read(_READ_CHUNK_BYTES)
        if not chunk:
            break
        total += len(chunk)
        if total > max_bytes:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"File too large. Maximum allowed size is {max_bytes // (1024 * 1024)} MB.",
            )
        chunks.append(chunk)
    return b"".join(chunks)


@router.post(
    "/resume",
    response_model=ResumeAnalysisResponse,
    response_model_exclude_none=True,
    responses={500: {"model": ErrorResponse}},
)
@rate_limit()
async def upload_resume(
    request: Request,
    resume: UploadFile | str | None = File(default=None),
    media: str = Form(default="image"),
):
    _ = request
    if resume is None or isinstance(resume, str):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No resume file uploaded")

    mode = (media or "image").strip().lower()
    if mode not in MEDIA_MODES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unsupported media '{media}'. Allowed: {', '.join(sorted(MEDIA_MODES))}.",
        )

    content = await _read_upload(resume, settings.max_upload_bytes)
    try:
        validate_pdf_upload(
            filename=resume.filename or "resume.pdf",
            content_type=resume.content_type,
            content=content,
            max_bytes=settings.max_upload_bytes,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    try:
        with temporary_upload(content, resume.filename, settings.upload_dir) as path:
            return await process_resume(path, media=mode)
    except PDFExtractionError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logger.exception("resume_processing_failed filename=%s", resume.filename)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ErrorResponse(error="Error processing resume", details=str(exc)).model_dump(),
        )
