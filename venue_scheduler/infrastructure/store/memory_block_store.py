from __future__ import annotations

import threading

from venue_scheduler.application.ports.block_store import CalendarBlockStorePort
from venue_scheduler.domain.entities.calendar_block import CalendarBlock


class MemoryCalendarBlockStore(CalendarBlockStorePort):
    def __init__(self, blocks: list[CalendarBlock] | None = None) -> None:
        self._blocks: list[CalendarBlock] = list(blocks or [])
        self._lock = threading.Lock()

    def list_blocks(self) -> list[CalendarBlock]:
        with self._lock:
            return list(self._blocks)

    def add_if_absent(self, block: CalendarBlock) -> bool:
        with self._lock:
            if any(existing.same_slot(block.date, block.recurring) for existing in self._blocks):
                return False
            self._blocks = [*self._blocks, block]
            return True

    def remove(self, block_id: str) -> bool:
        with self._lock:
            remaining = [block for block in self._blocks if block.id != block_id]
            if len(remaining) == len(self._blocks):
                return False
            self._blocks = remaining
            return True
