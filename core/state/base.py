"""Abstract base class for persisted key/value state stores."""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional


class StateStore(ABC):
    """Abstract base class for small pieces of state shared across runs.

    Holds JSON-compatible records under fixed keys (e.g. the scoring circuit
    flag). Implementations only need read-your-writes within a process;
    across processes eventual consistency is enough.
    """

    @abstractmethod
    def read(self, key: str) -> Optional[Dict[str, Any]]:
        """Retrieve the record stored under *key*.

        Args:
            key: Record key

        Returns:
            The stored record, or None if nothing is stored
        """
        pass

    @abstractmethod
    def write(self, key: str, value: Dict[str, Any]) -> None:
        """Store *value* under *key*, replacing any previous record.

        Args:
            key: Record key
            value: JSON-compatible record
        """
        pass
