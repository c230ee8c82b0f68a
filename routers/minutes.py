"""
Minutes router: generation pipeline, document editing and distribution.

Pipeline endpoints drive the ProcessingController; editing endpoints operate
on the working snapshot of the generated document; /send distributes the
committed snapshot.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException, Query

from models.api_models import (
    AppendItemRequest,
    CollectionItemResponse,
    RecipientListResponse,
    RecipientRequest,
    SendMinutesRequest,
    SendMinutesResponse,
    UpdateFieldsRequest,
    UpdateItemRequest,
)
from models.generation_request import GenerationRequest
from models.minutes import MinutesDocument
from models.processing import ProcessingStatus
from models.request_context import AppContext
from services.errors import (
    EmptyRecipientListError,
    IndexOutOfRangeError,
    MalformedResponseError,
    MissingCredentialError,
    ProcessingInProgressError,
    TransportError,
)
from services.minutes_editor import COLLECTIONS, MinutesEditor
from utils.context_utils import get_app_context

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/minutes", tags=["minutes"])


async def run_generation(
    context: AppContext,
    body: GenerationRequest,
    api_key: Optional[str],
) -> ProcessingStatus:
    """Run the pipeline and translate a failed run into an HTTP error."""
    controller = context.controller
    try:
        status = await controller.process(body, api_key=api_key)
    except ProcessingInProgressError as e:
        raise HTTPException(status_code=409, detail=str(e))

    error = controller.last_error
    if error is None:
        return status

    if isinstance(error, MissingCredentialError):
        status_code = 400
    elif isinstance(error, (TransportError, MalformedResponseError)):
        status_code = 502
    else:
        status_code = 500
    raise HTTPException(status_code=status_code, detail=status.failure_reason)


def _require_editor(context: AppContext) -> MinutesEditor:
    editor = context.controller.editor
    if editor is None:
        raise HTTPException(status_code=409, detail="No meeting minutes have been generated")
    return editor


def _check_collection(collection: str) -> None:
    if collection not in COLLECTIONS:
        raise HTTPException(
            status_code=404,
            detail=f"Unknown collection '{collection}'"
        )


# --- Pipeline ---

@router.post("/generate", response_model=ProcessingStatus)
async def generate_minutes(
    body: GenerationRequest,
    x_openai_api_key: Optional[str] = Header(default=None),
    context: AppContext = Depends(get_app_context),
):
    """
    Generate minutes from a pasted transcript.

    The optional X-OpenAI-API-Key header takes precedence over the stored key.

    Raises:
        HTTPException: 400 missing credential, 409 run in progress,
            502 transport failure or malformed model response
    """
    logger.info(f"Generate requested: transcript_length={len(body.transcript_text)}")
    return await run_generation(context, body, x_openai_api_key)


@router.get("/status", response_model=ProcessingStatus)
async def get_status(context: AppContext = Depends(get_app_context)):
    return context.controller.status()


@router.post("/reset", response_model=ProcessingStatus)
async def reset(context: AppContext = Depends(get_app_context)):
    """Start over: discard both snapshots and return to idle."""
    try:
        return context.controller.reset()
    except ProcessingInProgressError as e:
        raise HTTPException(status_code=409, detail=str(e))


# --- Document ---

@router.get("/document", response_model=MinutesDocument)
async def get_document(
    view: str = Query(default="working", pattern="^(working|committed)$"),
    context: AppContext = Depends(get_app_context),
):
    editor = _require_editor(context)
    return editor.committed if view == "committed" else editor.working


@router.patch("/document", response_model=MinutesDocument)
async def update_fields(
    body: UpdateFieldsRequest,
    context: AppContext = Depends(get_app_context),
):
    """Replace the supplied scalar fields of the working snapshot."""
    editor = _require_editor(context)
    if body.meeting_title is not None:
        editor.set_meeting_title(body.meeting_title)
    if body.meeting_date is not None:
        editor.set_meeting_date(body.meeting_date)
    if body.summary is not None:
        editor.set_summary(body.summary)
    return editor.working


@router.post("/document/{collection}", response_model=CollectionItemResponse)
async def append_item(
    collection: str,
    body: Optional[AppendItemRequest] = None,
    context: AppContext = Depends(get_app_context),
):
    _check_collection(collection)
    editor = _require_editor(context)
    item = editor.append(collection, body.value if body else None)
    index = len(getattr(editor.working, collection)) - 1
    return CollectionItemResponse(index=index, item=item)


@router.put("/document/{collection}/{index}", response_model=CollectionItemResponse)
async def update_item(
    collection: str,
    index: int,
    body: UpdateItemRequest,
    context: AppContext = Depends(get_app_context),
):
    _check_collection(collection)
    editor = _require_editor(context)
    try:
        item = editor.update_at(collection, index, body.value, field=body.field)
    except IndexOutOfRangeError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return CollectionItemResponse(index=index, item=item)


@router.delete("/document/{collection}/{index}", response_model=MinutesDocument)
async def remove_item(
    collection: str,
    index: int,
    context: AppContext = Depends(get_app_context),
):
    _check_collection(collection)
    editor = _require_editor(context)
    try:
        editor.remove_at(collection, index)
    except IndexOutOfRangeError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return editor.working


@router.post("/commit", response_model=MinutesDocument)
async def commit(context: AppContext = Depends(get_app_context)):
    """Save the working snapshot."""
    return _require_editor(context).commit()


@router.post("/discard", response_model=MinutesDocument)
async def discard(context: AppContext = Depends(get_app_context)):
    """Drop unsaved edits."""
    return _require_editor(context).discard_edits()


# --- Distribution ---

@router.get("/recipients", response_model=RecipientListResponse)
async def list_recipients(context: AppContext = Depends(get_app_context)):
    return RecipientListResponse(recipients=_require_editor(context).recipients)


@router.post("/recipients", response_model=RecipientListResponse)
async def add_recipient(
    body: RecipientRequest,
    context: AppContext = Depends(get_app_context),
):
    editor = _require_editor(context)
    editor.add_recipient(body.email)
    return RecipientListResponse(recipients=editor.recipients)


@router.delete("/recipients/{email}", response_model=RecipientListResponse)
async def remove_recipient(
    email: str,
    context: AppContext = Depends(get_app_context),
):
    editor = _require_editor(context)
    editor.remove_recipient(email)
    return RecipientListResponse(recipients=editor.recipients)


@router.post("/send", response_model=SendMinutesResponse)
async def send_minutes(
    body: Optional[SendMinutesRequest] = None,
    context: AppContext = Depends(get_app_context),
):
    """
    Distribute the committed snapshot.

    Recipients from the body are deduplicated in order; without a body the
    stored recipient list is used.

    Raises:
        HTTPException: 400 when there are no recipients, 409 without a document
    """
    editor = _require_editor(context)
    if body is not None and body.recipients is not None:
        recipients = list(dict.fromkeys(r.strip() for r in body.recipients if r.strip()))
    else:
        recipients = editor.recipients

    try:
        accepted = await context.distribution_service.send(editor.committed, recipients)
    except EmptyRecipientListError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return SendMinutesResponse(accepted=accepted)
