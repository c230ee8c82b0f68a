import redis.asyncio as redis
import json
import os
import logging
from datetime import datetime, timezone
from typing import Iterable, List

from models.minutes import MinutesDocument
from services.errors import EmptyRecipientListError

logger = logging.getLogger(__name__)


class DistributionService:
    """Hands finalized minutes to the external mailer via a Redis stream.

    Delivery itself happens outside this service; send() only queues the
    request and never fails once recipients are present.
    """

    def __init__(self):
        redis_url = os.getenv("REDIS_URL", "redis://localhost:6379")
        self.redis_client = redis.from_url(
            redis_url,
            decode_responses=True,
            socket_timeout=5,
            socket_connect_timeout=5
        )
        self.stream_name = "minutes_distribution"

    async def send(self, document: MinutesDocument, recipients: Iterable[str]) -> int:
        """Queue the document for delivery and return the number of recipients accepted.

        Recipients are expected to be deduplicated and validated by the caller.

        Raises:
            EmptyRecipientListError: If recipients is empty.
        """
        recipient_list: List[str] = list(recipients)
        if not recipient_list:
            raise EmptyRecipientListError()

        event_data = {
            "event_type": "minutes_distribution_requested",
            "recipients": json.dumps(recipient_list),
            "document": document.model_dump_json(by_alias=True),
            "timestamp": datetime.now(timezone.utc).isoformat()
        }

        try:
            await self.redis_client.xadd(
                self.stream_name,
                event_data,
                maxlen=10000
            )
            logger.info(
                f"Queued minutes for distribution: title={document.meeting_title!r}, "
                f"recipients={len(recipient_list)}"
            )
        except redis.RedisError as e:
            logger.error(
                f"Distribution hand-off failed: title={document.meeting_title!r}, error={e}"
            )

        return len(recipient_list)
