from abc import ABC, abstractmethod

from venue_scheduler.domain.entities.booking import ClientRef


class ClientDirectoryPort(ABC):
    @abstractmethod
    def resolve_client(self, client_id: int) -> ClientRef | None:
        """Resolve a client id to its display reference. Returns None if unknown."""
        raise NotImplementedError
