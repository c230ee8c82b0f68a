"""Editable view over a generated MinutesDocument.

The editor keeps two snapshots of the document:
    committed: the last saved version
    working:   the live copy all edits apply to

commit() copies working over committed; discard_edits() copies committed
back over working. The committed snapshot is never mutated in place.
"""
import time
import logging
from typing import List, Optional, Union

from models.minutes import ActionItem, MinutesDocument
from services.errors import IndexOutOfRangeError

logger = logging.getLogger(__name__)

STRING_COLLECTIONS = ("attendees", "agenda", "decisions")
COLLECTIONS = STRING_COLLECTIONS + ("action_items",)
ACTION_ITEM_FIELDS = ("task", "owner", "deadline")


class MinutesEditor:
    """Per-collection append/update/remove, scalar setters and snapshot control."""

    def __init__(self, document: MinutesDocument):
        self._committed = document.model_copy(deep=True)
        self._working = document.model_copy(deep=True)
        self._last_action_item_id = 0
        self._recipients: List[str] = []

    @property
    def committed(self) -> MinutesDocument:
        return self._committed.model_copy(deep=True)

    @property
    def working(self) -> MinutesDocument:
        return self._working.model_copy(deep=True)

    @property
    def is_dirty(self) -> bool:
        return self._working != self._committed

    # --- Collections ---

    def _collection(self, name: str) -> list:
        if name not in COLLECTIONS:
            raise ValueError(f"Unknown collection '{name}', expected one of {COLLECTIONS}")
        return getattr(self._working, name)

    def _check_index(self, name: str, items: list, index: int) -> None:
        if index < 0 or index >= len(items):
            raise IndexOutOfRangeError(name, index, len(items))

    def _next_action_item_id(self) -> str:
        """Time-based id, strictly increasing and unused in the working document."""
        existing = {item.id for item in self._working.action_items}
        candidate = max(int(time.time() * 1000), self._last_action_item_id + 1)
        while str(candidate) in existing:
            candidate += 1
        self._last_action_item_id = candidate
        return str(candidate)

    def append(self, collection: str, value: Optional[str] = None) -> Union[str, ActionItem]:
        """Add a new element at the end of a collection and return it.

        String collections get value (default ""); action items get a blank
        item with a fresh id.
        """
        items = self._collection(collection)
        if collection == "action_items":
            item = ActionItem(id=self._next_action_item_id(), task="", owner="", deadline="")
        else:
            item = value if value is not None else ""
        items.append(item)
        logger.debug(f"Appended to {collection}: length={len(items)}")
        return item

    def update_at(
        self,
        collection: str,
        index: int,
        value: str,
        field: Optional[str] = None,
    ) -> Union[str, ActionItem]:
        """Replace an element, or one field of an action item, and return it."""
        items = self._collection(collection)
        self._check_index(collection, items, index)
        if value is None:
            raise ValueError("value cannot be None")

        if collection == "action_items":
            if field not in ACTION_ITEM_FIELDS:
                raise ValueError(
                    f"Unknown action item field '{field}', expected one of {ACTION_ITEM_FIELDS}"
                )
            items[index] = items[index].model_copy(update={field: value})
        else:
            if field is not None:
                raise ValueError(f"{collection} elements have no fields")
            items[index] = value
        return items[index]

    def remove_at(self, collection: str, index: int) -> Union[str, ActionItem]:
        """Delete the element at index, shifting later elements down, and return it."""
        items = self._collection(collection)
        self._check_index(collection, items, index)
        removed = items.pop(index)
        logger.debug(f"Removed from {collection}: index={index}, length={len(items)}")
        return removed

    # --- Scalars ---

    def _set_scalar(self, name: str, value: str) -> None:
        if value is None:
            raise ValueError(f"{name} cannot be None")
        setattr(self._working, name, value)

    def set_meeting_title(self, value: str) -> None:
        self._set_scalar("meeting_title", value)

    def set_meeting_date(self, value: str) -> None:
        self._set_scalar("meeting_date", value)

    def set_summary(self, value: str) -> None:
        self._set_scalar("summary", value)

    # --- Snapshots ---

    def commit(self) -> MinutesDocument:
        """Save the working snapshot; returns the new committed snapshot."""
        self._committed = self._working.model_copy(deep=True)
        logger.info(
            f"Minutes committed: title={self._committed.meeting_title!r}, "
            f"action_items={len(self._committed.action_items)}"
        )
        return self.committed

    def discard_edits(self) -> MinutesDocument:
        """Reset the working snapshot to the committed one; returns it."""
        self._working = self._committed.model_copy(deep=True)
        logger.info("Working edits discarded")
        return self.working

    # --- Recipients ---

    @property
    def recipients(self) -> List[str]:
        return list(self._recipients)

    def add_recipient(self, address: str) -> bool:
        """Add an address once; returns False for blanks and duplicates."""
        address = (address or "").strip()
        if not address or address in self._recipients:
            return False
        self._recipients.append(address)
        return True

    def remove_recipient(self, address: str) -> bool:
        address = (address or "").strip()
        if address not in self._recipients:
            return False
        self._recipients.remove(address)
        return True
