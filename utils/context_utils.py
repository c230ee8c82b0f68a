"""
Application Context Utilities

This module builds the process-wide AppContext on first use and exposes it
as a FastAPI dependency. There is a single controller per process.

get_app_context is a sync dependency, so FastAPI calls it from its
threadpool; the first build is guarded by a lock so concurrent first
requests share one context.
"""

import logging
import threading
from typing import Optional

from models.request_context import AppContext
from services.credential_store import CredentialStore
from services.distribution_service import DistributionService
from services.generation_service import OpenAIGenerationService
from services.minutes_generator import MinutesGenerator
from services.processing_controller import ProcessingController

logger = logging.getLogger(__name__)

_app_context: Optional[AppContext] = None
_app_context_lock = threading.Lock()


def build_app_context() -> AppContext:
    """Wire the production services together."""
    credential_store = CredentialStore()
    generator = MinutesGenerator(
        credential_store=credential_store,
        generation_service=OpenAIGenerationService(),
    )
    return AppContext(
        credential_store=credential_store,
        controller=ProcessingController(generator),
        distribution_service=DistributionService(),
    )


def get_app_context() -> AppContext:
    """Return the shared AppContext, creating it on first call."""
    global _app_context
    if _app_context is not None:
        return _app_context
    with _app_context_lock:
        if _app_context is None:
            _app_context = build_app_context()
            logger.info("Application context initialized")
    return _app_context
