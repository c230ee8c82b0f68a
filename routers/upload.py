"""Upload router for transcript files.

POST /minutes/upload accepts a plain-text transcript as multipart form data
and runs it through the same pipeline as POST /minutes/generate.

Flow:
    Browser                          Backend                        OpenAI
    ───────                          ───────                        ──────
    │ POST /upload (file) ──────────▶│ validate + decode (upload)     │
    │                                │ chat completion (extraction) ─▶│
    │                                │◀─────────────── JSON minutes ──│
    │◀──── {stage: editing} ─────────│ parse (generation)             │
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Header, HTTPException, UploadFile
from pydantic import ValidationError

from models.generation_request import GenerationRequest
from models.processing import ProcessingStatus
from models.request_context import AppContext
from routers.minutes import run_generation
from utils.context_utils import get_app_context
from utils import transcript_utils
from utils.transcript_utils import TranscriptUploadError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/minutes", tags=["upload"])


@router.post("/upload", response_model=ProcessingStatus)
async def upload_transcript(
    file: UploadFile = File(...),
    meeting_title: Optional[str] = Form(default=None),
    meeting_date: Optional[str] = Form(default=None),
    x_openai_api_key: Optional[str] = Header(default=None),
    context: AppContext = Depends(get_app_context),
):
    """Generate minutes from an uploaded .txt transcript.

    Raises:
        HTTPException 400: Empty or undecodable file, missing credential
        HTTPException 409: A run is already in progress
        HTTPException 413: File larger than 100MB
        HTTPException 415: Audio or other non-text file
        HTTPException 422: Blank transcript or malformed meeting_date
        HTTPException 502: Transport failure or malformed model response
    """
    limit = transcript_utils.MAX_UPLOAD_BYTES
    if file.size is not None and file.size > limit:
        logger.warning(f"Transcript upload rejected: filename={file.filename}, size={file.size}")
        raise HTTPException(status_code=413, detail="Please upload a file smaller than 100MB")

    # Read at most one byte past the limit.
    data = await file.read(limit + 1)
    logger.info(
        f"Transcript upload: filename={file.filename}, "
        f"content_type={file.content_type}, size={len(data)}"
    )

    try:
        text = transcript_utils.decode_transcript_upload(file.filename, file.content_type, data)
    except TranscriptUploadError as e:
        logger.warning(f"Transcript upload rejected: filename={file.filename}, reason={e}")
        raise HTTPException(status_code=e.status_code, detail=str(e))

    try:
        body = GenerationRequest(
            transcript_text=text,
            meeting_title=meeting_title,
            meeting_date=meeting_date,
        )
    except ValidationError as e:
        logger.warning(f"Transcript upload failed validation: errors={e.error_count()}")
        detail = "; ".join(error["msg"] for error in e.errors())
        raise HTTPException(status_code=422, detail=f"Invalid upload: {detail}")

    return await run_generation(context, body, x_openai_api_key)
