"""Transport for the chat completion call that produces the minutes.

GenerationService is the injectable capability used by MinutesGenerator;
OpenAIGenerationService binds it to the OpenAI Chat Completions endpoint.
"""
import os
import logging
from typing import Any, Dict, List, Optional, Protocol

import openai
from openai import AsyncOpenAI

from services.errors import TransportError

logger = logging.getLogger(__name__)


class GenerationService(Protocol):
    """Issues one chat completion request and returns the raw response payload."""

    async def create_completion(
        self,
        *,
        api_key: str,
        model: str,
        messages: List[Dict[str, str]],
        temperature: float,
        max_tokens: int,
    ) -> Dict[str, Any]:
        ...


def _server_message(body: Any) -> Optional[str]:
    """Pull the error message out of an OpenAI error body."""
    if isinstance(body, dict):
        inner = body.get("error", body)
        if isinstance(inner, dict) and inner.get("message"):
            return str(inner["message"])
    if isinstance(body, str) and body:
        return body
    return None


class OpenAIGenerationService:
    """GenerationService backed by the openai SDK.

    A client is created per call because the bearer credential is resolved per
    request. SDK retries are disabled; the caller decides whether to retry.
    """

    def __init__(self):
        self.base_url = os.getenv("OPENAI_BASE_URL") or None
        self.timeout = float(os.getenv("OPENAI_TIMEOUT", "60"))
        logger.info(
            f"OpenAIGenerationService initialized: base_url={self.base_url or 'default'}, "
            f"timeout={self.timeout}s"
        )

    async def create_completion(
        self,
        *,
        api_key: str,
        model: str,
        messages: List[Dict[str, str]],
        temperature: float,
        max_tokens: int,
    ) -> Dict[str, Any]:
        """Call POST /chat/completions.

        Raises:
            TransportError: On non-success status or when the call cannot complete.
        """
        try:
            async with AsyncOpenAI(
                api_key=api_key,
                base_url=self.base_url,
                timeout=self.timeout,
                max_retries=0,
            ) as client:
                completion = await client.chat.completions.create(
                    model=model,
                    messages=messages,
                    temperature=temperature,
                    max_tokens=max_tokens,
                )
        except openai.APIStatusError as e:
            logger.error(
                f"Chat completion rejected: status={e.status_code}, error={e}"
            )
            raise TransportError(e.status_code, _server_message(e.body)) from e
        except openai.APIConnectionError as e:
            logger.error(f"Chat completion could not complete: error={e}")
            raise TransportError(None, str(e)) from e

        return completion.model_dump()
