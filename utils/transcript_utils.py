"""
Transcript Upload Utilities

Validation and decoding for transcripts submitted as files. Only plain text
is accepted; audio uploads are rejected because transcription is not
performed by this service.
"""

import logging
from typing import Optional

logger = logging.getLogger(__name__)

MAX_UPLOAD_BYTES = 100 * 1024 * 1024  # 100MB

_TEXT_MIME_TYPES = {"text/plain"}


class TranscriptUploadError(ValueError):
    """An uploaded transcript file was rejected.

    Attributes:
        status_code: HTTP status the upload endpoint should answer with.
    """

    def __init__(self, message: str, status_code: int = 400):
        self.status_code = status_code
        super().__init__(message)


def _base_mime_type(content_type: Optional[str]) -> str:
    """Strip parameters such as '; charset=utf-8' and normalize case."""
    return (content_type or "").split(";")[0].strip().lower()


def is_text_upload(filename: Optional[str], content_type: Optional[str]) -> bool:
    """A file is a transcript if it is text/plain or named *.txt."""
    if _base_mime_type(content_type) in _TEXT_MIME_TYPES:
        return True
    return bool(filename) and filename.lower().endswith(".txt")


def decode_transcript_upload(
    filename: Optional[str],
    content_type: Optional[str],
    data: bytes,
) -> str:
    """Validate an uploaded file and return its text.

    Raises:
        TranscriptUploadError: 413 when too large, 415 for audio or other
            non-text types, 400 for undecodable or empty content.
    """
    if len(data) > MAX_UPLOAD_BYTES:
        raise TranscriptUploadError(
            "Please upload a file smaller than 100MB", status_code=413
        )

    mime_type = _base_mime_type(content_type)
    if mime_type.startswith("audio/"):
        raise TranscriptUploadError(
            "Audio transcription is not supported; please upload a text transcript (.txt)",
            status_code=415,
        )
    if not is_text_upload(filename, content_type):
        raise TranscriptUploadError(
            "Invalid file type; please upload a text file (.txt)", status_code=415
        )

    try:
        text = data.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        logger.warning(f"Transcript upload is not UTF-8: filename={filename}, error={e}")
        raise TranscriptUploadError("Transcript file must be UTF-8 encoded text") from e

    if not text.strip():
        raise TranscriptUploadError("Transcript file is empty")

    logger.info(f"Transcript upload decoded: filename={filename}, length={len(text)} chars")
    return text
