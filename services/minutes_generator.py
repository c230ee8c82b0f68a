"""MinutesGenerator for turning a raw transcript into structured meeting minutes.

One chat completion is requested per call. The response content must be a
JSON document matching MinutesDocument; anything else is rejected as a whole.
"""
import os
import json
import logging
from datetime import date
from typing import Optional

from pydantic import ValidationError

from models.minutes import DEFAULT_MEETING_TITLE, MinutesDocument
from services.credential_store import CredentialStore
from services.errors import MalformedResponseError, MissingCredentialError
from services.generation_service import GenerationService

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-4.1-2025-04-14"


class MinutesGenerator:
    """Builds the minutes prompt, issues the call and parses the result."""

    def __init__(
        self,
        credential_store: CredentialStore,
        generation_service: GenerationService,
        temperature: float = 0.3,
        max_tokens: int = 2000,
    ):
        self.credential_store = credential_store
        self.generation_service = generation_service
        self.model = os.getenv("OPENAI_MODEL", DEFAULT_MODEL)
        self.temperature = temperature
        self.max_tokens = max_tokens
        logger.info(f"MinutesGenerator initialized with model: {self.model}")

    async def generate(
        self,
        transcript_text: str,
        meeting_title: Optional[str] = None,
        meeting_date: Optional[str] = None,
        api_key: Optional[str] = None,
    ) -> MinutesDocument:
        """Generate minutes for a transcript.

        Args:
            transcript_text: The raw transcript.
            meeting_title: Title to stamp on the document; defaults to a placeholder.
            meeting_date: YYYY-MM-DD date to stamp on the document; defaults to today.
            api_key: Explicit credential, takes precedence over the stored one.

        Returns:
            The parsed MinutesDocument.

        Raises:
            MissingCredentialError: If no credential is available.
            TransportError: If the call fails or returns a non-success status.
            MalformedResponseError: If the content is absent or not a valid document.
        """
        credential = api_key or await self.credential_store.get()
        if not credential:
            raise MissingCredentialError()

        logger.info(
            f"Generating minutes: model={self.model}, "
            f"transcript_length={len(transcript_text)} chars"
        )

        response = await self.generation_service.create_completion(
            api_key=credential,
            model=self.model,
            messages=[
                {"role": "system", "content": self._get_system_prompt()},
                {"role": "user", "content": self._build_user_prompt(transcript_text)},
            ],
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )

        content = self._extract_content(response)
        document = self._parse_document(
            content,
            meeting_title=meeting_title or DEFAULT_MEETING_TITLE,
            meeting_date=meeting_date or date.today().isoformat(),
        )

        logger.info(
            f"Minutes generated: attendees={len(document.attendees)}, "
            f"agenda={len(document.agenda)}, decisions={len(document.decisions)}, "
            f"action_items={len(document.action_items)}"
        )
        return document

    def _extract_content(self, response: dict) -> str:
        """Return choices[0].message.content or raise MalformedResponseError."""
        try:
            content = response["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            content = None

        if not content:
            logger.error("No content received from OpenAI")
            raise MalformedResponseError("No content received from OpenAI")
        return content

    def _parse_document(
        self,
        content: str,
        meeting_title: str,
        meeting_date: str,
    ) -> MinutesDocument:
        """Parse the content strictly; caller metadata replaces any model guesses."""
        try:
            payload = json.loads(content)
        except json.JSONDecodeError as e:
            logger.error(f"Failed to parse OpenAI response: error={e}, content={content[:200]!r}")
            raise MalformedResponseError("Invalid JSON response from OpenAI") from e

        if not isinstance(payload, dict):
            logger.error(f"OpenAI response is not a JSON object: type={type(payload).__name__}")
            raise MalformedResponseError("Invalid JSON response from OpenAI")

        payload["meetingTitle"] = meeting_title
        payload["meetingDate"] = meeting_date

        try:
            return MinutesDocument.model_validate(payload)
        except ValidationError as e:
            logger.error(
                f"OpenAI response does not match the minutes schema: "
                f"errors={e.error_count()}",
                exc_info=True
            )
            raise MalformedResponseError(
                f"OpenAI response does not match the minutes schema: {e.error_count()} error(s)"
            ) from e

    def _get_system_prompt(self) -> str:
        return (
            "You are an expert meeting minutes generator. Extract structured "
            "information from meeting transcripts and return only valid JSON."
        )

    def _build_user_prompt(self, transcript_text: str) -> str:
        """Embed the transcript verbatim with the schema and extraction guidance."""
        return f"""Please analyze the following meeting transcript and extract structured information to create professional meeting minutes. Return ONLY a valid JSON object with the following structure:

{{
  "attendees": ["Name (Role)", ...],
  "agenda": ["Agenda item 1", ...],
  "summary": "Comprehensive summary of the meeting discussion",
  "decisions": ["Decision 1", ...],
  "actionItems": [
    {{
      "id": "1",
      "task": "Task description",
      "owner": "Person Name",
      "deadline": "YYYY-MM-DD"
    }}, ...
  ]
}}

Field types:
- attendees, agenda, decisions: arrays of strings
- summary: string
- actionItems: array of objects; id is a string unique within the list, deadline is a YYYY-MM-DD date string

Meeting Transcript:
{transcript_text}

Instructions:
- Extract actual attendee names and roles if mentioned
- Identify key discussion points for the agenda, one concise topic per item
- Provide a comprehensive summary of what was discussed
- List clear decisions that were made, one concise decision per item
- Extract actionable items with owners and deadlines (if not specified, suggest reasonable deadlines within 1-2 weeks of {date.today().isoformat()})
- Ensure all JSON is properly formatted and valid"""
