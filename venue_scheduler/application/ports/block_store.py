from abc import ABC, abstractmethod

from venue_scheduler.domain.entities.calendar_block import CalendarBlock


class CalendarBlockStorePort(ABC):
    @abstractmethod
    def list_blocks(self) -> list[CalendarBlock]:
        """Snapshot of every stored block, in insertion order."""
        raise NotImplementedError

    @abstractmethod
    def add_if_absent(self, block: CalendarBlock) -> bool:
        """Store `block` unless one with the same slot exists, as one atomic step.

        Returns False, storing nothing, when the slot is already taken.
        """
        raise NotImplementedError

    @abstractmethod
    def remove(self, block_id: str) -> bool:
        """Remove a block. Returns False when no block has that id."""
        raise NotImplementedError
