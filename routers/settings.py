"""Settings router for the stored OpenAI API key."""

import logging

import redis.asyncio as redis
from fastapi import APIRouter, Depends, HTTPException

from models.api_models import ApiKeyRequest, ApiKeyStatusResponse
from models.request_context import AppContext
from services.credential_store import mask_credential
from services.errors import InvalidCredentialError
from utils.context_utils import get_app_context

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/settings", tags=["settings"])


async def _key_status(context: AppContext) -> ApiKeyStatusResponse:
    key = await context.credential_store.get()
    return ApiKeyStatusResponse(
        configured=key is not None,
        masked_key=mask_credential(key) if key else None,
    )


@router.get("/api-key", response_model=ApiKeyStatusResponse)
async def get_api_key_status(context: AppContext = Depends(get_app_context)):
    """Report whether a key is stored. The key itself is never returned."""
    return await _key_status(context)


@router.put("/api-key", response_model=ApiKeyStatusResponse)
async def save_api_key(
    body: ApiKeyRequest,
    context: AppContext = Depends(get_app_context),
):
    try:
        await context.credential_store.set(body.api_key)
    except InvalidCredentialError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except redis.RedisError as e:
        logger.error(f"API key save failed: error={e}", exc_info=True)
        raise HTTPException(status_code=503, detail="Settings storage is unavailable")
    return await _key_status(context)


@router.delete("/api-key", response_model=ApiKeyStatusResponse)
async def clear_api_key(context: AppContext = Depends(get_app_context)):
    try:
        await context.credential_store.clear()
    except redis.RedisError as e:
        logger.error(f"API key clear failed: error={e}", exc_info=True)
        raise HTTPException(status_code=503, detail="Settings storage is unavailable")
    return ApiKeyStatusResponse(configured=False)
