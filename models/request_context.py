"""
Application Context Data Model

This module defines the AppContext dataclass bundling the process-wide
services that request handlers operate on.
"""

from dataclasses import dataclass

from services.credential_store import CredentialStore
from services.distribution_service import DistributionService
from services.processing_controller import ProcessingController


@dataclass
class AppContext:
    """
    Services shared by every request in this process.

    Attributes:
        credential_store: Persistent storage for the OpenAI API key
        controller: The processing state machine and, once generated, the editor
        distribution_service: Hand-off for sending minutes to recipients
    """
    credential_store: CredentialStore
    controller: ProcessingController
    distribution_service: DistributionService
