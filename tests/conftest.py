"""Shared fixtures for the meeting minutes tests.

Provides:
- Fake Redis backed CredentialStore and DistributionService
- StubGenerationService returning canned chat completion payloads
- A sample MinutesDocument
"""
import asyncio
import json
from typing import Any, Dict, List, Optional

import fakeredis
import fakeredis.aioredis
import pytest

from models.minutes import MinutesDocument
from services.credential_store import CredentialStore
from services.distribution_service import DistributionService
from services.minutes_generator import MinutesGenerator
from services.processing_controller import ProcessingController


TEST_API_KEY = "sk-test-0123456789abcdef"

STUB_MINUTES = {
    "attendees": ["Alice", "Bob"],
    "agenda": ["Ship date"],
    "summary": "Team agreed to ship Friday.",
    "decisions": ["Ship Friday"],
    "actionItems": [
        {"id": "1", "task": "Write tests", "owner": "Bob", "deadline": "2024-03-13"}
    ],
}

STUB_TRANSCRIPT = "Alice: Let's ship Friday. Bob: I'll write the tests by Wednesday."


def completion_payload(content: Optional[str]) -> Dict[str, Any]:
    """Build a chat completion response body around content."""
    return {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
        ],
    }


class StubGenerationService:
    """Deterministic GenerationService.

    Returns the canned minutes (or a given payload) after an optional delay,
    or raises the configured error. Every call's keyword arguments are
    recorded in `calls`.
    """

    def __init__(
        self,
        content: Optional[str] = None,
        response: Optional[Dict[str, Any]] = None,
        error: Optional[Exception] = None,
        delay: float = 0.0,
    ):
        self.content = json.dumps(STUB_MINUTES) if content is None else content
        self.response = response
        self.error = error
        self.delay = delay
        self.calls: List[Dict[str, Any]] = []

    async def create_completion(self, **kwargs) -> Dict[str, Any]:
        self.calls.append(kwargs)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        if self.response is not None:
            return self.response
        return completion_payload(self.content)


@pytest.fixture
def fake_redis_server():
    return fakeredis.FakeServer()


@pytest.fixture
def credential_store(fake_redis_server):
    """CredentialStore on an isolated fake Redis, with no key configured."""
    store = CredentialStore()
    store.redis_client = fakeredis.aioredis.FakeRedis(
        server=fake_redis_server, decode_responses=True
    )
    return store


@pytest.fixture
def distribution_service(fake_redis_server):
    service = DistributionService()
    service.redis_client = fakeredis.aioredis.FakeRedis(
        server=fake_redis_server, decode_responses=True
    )
    return service


@pytest.fixture
def stub_service():
    return StubGenerationService()


@pytest.fixture
def generator(credential_store, stub_service):
    return MinutesGenerator(credential_store=credential_store, generation_service=stub_service)


@pytest.fixture
def controller(generator):
    return ProcessingController(generator)


@pytest.fixture
def sample_document():
    return MinutesDocument(
        meeting_title="Weekly Team Standup",
        meeting_date="2024-03-08",
        attendees=[
            "Sarah Johnson (Product Manager)",
            "Mike Chen (Lead Developer)",
            "Emma Wilson (UX Designer)",
        ],
        agenda=[
            "Project progress review",
            "Technical challenges",
            "Marketing launch timeline",
        ],
        summary="The team reviewed Q1 progress and agreed on a phased Q2 plan.",
        decisions=[
            "Approved final UI designs",
            "Marketing campaign launches next Tuesday",
        ],
        action_items=[
            {"id": "1", "task": "Deploy API to staging", "owner": "Mike Chen", "deadline": "2024-03-15"},
            {"id": "2", "task": "Finalize marketing assets", "owner": "Alex Rodriguez", "deadline": "2024-03-12"},
        ],
    )


@pytest.fixture
def make_generator(credential_store):
    """Factory for a MinutesGenerator over a StubGenerationService built from kwargs."""
    def _make(**kwargs) -> MinutesGenerator:
        return MinutesGenerator(
            credential_store=credential_store,
            generation_service=StubGenerationService(**kwargs),
        )
    return _make
