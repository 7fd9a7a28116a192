from __future__ import annotations

import logging
import uuid
from datetime import date

from venue_scheduler.application.exceptions import BlockNotFound, DuplicateBlock
from venue_scheduler.application.ports.block_store import CalendarBlockStorePort
from venue_scheduler.domain.entities.calendar_block import CalendarBlock


class CalendarBlockRegistry:
    """Single and annually recurring blocked dates.

    The registry only answers whether a date is blocked; it never rejects a
    booking by itself.
    """

    def __init__(self, store: CalendarBlockStorePort) -> None:
        self._store = store
        self._logger = logging.getLogger(__name__)

    def list_blocks(self) -> list[CalendarBlock]:
        return self._store.list_blocks()

    def blocks_for(self, day: date) -> list[CalendarBlock]:
        return [block for block in self._store.list_blocks() if block.applies_to(day)]

    def is_blocked(self, day: date) -> bool:
        return any(block.applies_to(day) for block in self._store.list_blocks())

    def add_block(self, day: date, reason: str, recurring: bool = False) -> str:
        block = CalendarBlock(
            id=uuid.uuid4().hex,
            date=day,
            reason=(reason or "").strip(),
            recurring=recurring,
        )
        if not self._store.add_if_absent(block):
            raise DuplicateBlock(
                f"{'Recurring' if recurring else 'Single'} block for {day.isoformat()} already exists"
            )
        self._logger.info(
            "Calendar block added",
            extra={"block_id": block.id, "period": day.isoformat(), "reason": block.reason},
        )
        return block.id

    def remove_block(self, block_id: str) -> None:
        if not self._store.remove(block_id):
            raise BlockNotFound(f"Calendar block {block_id} not found")
        self._logger.info("Calendar block removed", extra={"block_id": block_id})
