"""Exception taxonomy for the meeting minutes pipeline.

Generation errors (missing credential, transport failure, malformed response)
are converted by the ProcessingController into a transition back to idle.
Document-model and distribution errors are raised to the caller.
"""
from typing import Optional


class MinutesError(Exception):
    """Base class for all meeting minutes errors."""


class GenerationError(MinutesError):
    """Base class for failures of the document generation call."""


class MissingCredentialError(GenerationError):
    """No API key was passed explicitly and none is stored."""

    def __init__(self, message: str = "OpenAI API key is required. Please set it in the settings."):
        super().__init__(message)


class TransportError(GenerationError):
    """The generation call could not complete or returned a non-success status.

    Attributes:
        status_code: HTTP status of the failed call, None for network failures.
        server_message: Error message supplied by the server, if any.
    """

    def __init__(self, status_code: Optional[int] = None, server_message: Optional[str] = None):
        self.status_code = status_code
        self.server_message = server_message
        if status_code is None:
            message = f"OpenAI API request failed: {server_message or 'connection error'}"
        else:
            message = f"OpenAI API error: {status_code} {server_message or ''}".rstrip()
        super().__init__(message)


class MalformedResponseError(GenerationError):
    """The generated content is missing or not a valid minutes document."""


class EmptyRecipientListError(MinutesError):
    """Distribution was requested without any recipients."""

    def __init__(self, message: str = "Please add at least one email address."):
        super().__init__(message)


class IndexOutOfRangeError(MinutesError, IndexError):
    """A document edit targeted a position outside the collection."""

    def __init__(self, collection: str, index: int, length: int):
        self.collection = collection
        self.index = index
        self.length = length
        super().__init__(
            f"Index {index} out of range for {collection} (length={length})"
        )


class InvalidCredentialError(MinutesError, ValueError):
    """A credential was rejected on save."""


class InvalidTransitionError(MinutesError):
    """A processing stage transition not allowed by the transition table."""


class ProcessingInProgressError(MinutesError):
    """A generation request arrived while another one is in flight."""
