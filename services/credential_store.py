"""Persistent storage for the OpenAI API key.

The key lives under a single Redis entry so it survives restarts until it is
explicitly cleared. Absence of the entry means "not configured".
"""
import os
import logging
from typing import Optional

import redis.asyncio as redis

from services.errors import InvalidCredentialError

logger = logging.getLogger(__name__)

CREDENTIAL_PREFIX = "sk-"


def is_valid_credential(value: Optional[str]) -> bool:
    """Return True if value looks like an OpenAI secret key."""
    return bool(value) and value.startswith(CREDENTIAL_PREFIX)


def mask_credential(value: str) -> str:
    """Return a display-safe form of a key, e.g. sk-...abcd."""
    if len(value) <= len(CREDENTIAL_PREFIX) + 4:
        return f"{CREDENTIAL_PREFIX}..."
    return f"{CREDENTIAL_PREFIX}...{value[-4:]}"


class CredentialStore:
    """Get/set/clear access to the stored API key."""

    def __init__(self):
        redis_url = os.getenv("REDIS_URL", "redis://localhost:6379")
        self.redis_client = redis.from_url(
            redis_url,
            decode_responses=True,
            socket_timeout=5,
            socket_connect_timeout=5
        )
        self.key_name = "meeting_minutes:openai_api_key"

    async def get(self) -> Optional[str]:
        """Return the stored key, or None when not configured."""
        try:
            value = await self.redis_client.get(self.key_name)
        except redis.RedisError as e:
            logger.error(f"Credential read failed: error={e}")
            return None
        return value or None

    async def set(self, value: str) -> None:
        """Validate and persist a key.

        Raises:
            InvalidCredentialError: If the key is empty or lacks the sk- prefix.
        """
        value = (value or "").strip()
        if not value:
            raise InvalidCredentialError("Please enter your OpenAI API key")
        if not is_valid_credential(value):
            raise InvalidCredentialError(
                f"OpenAI API keys should start with '{CREDENTIAL_PREFIX}'"
            )

        await self.redis_client.set(self.key_name, value)
        logger.info(f"API key saved: key={mask_credential(value)}")

    async def clear(self) -> None:
        await self.redis_client.delete(self.key_name)
        logger.info("API key cleared")

    async def is_configured(self) -> bool:
        return await self.get() is not None
