"""Abstract base class for text context builders."""

from abc import ABC, abstractmethod
from typing import Any


class ContextBuilder(ABC):
    """Abstract base for turning pipeline data into plain text.

    Context builders separate data selection from text layout, so the scorer
    prompt and the alert summary can change format without touching the
    scoring or alerting logic.
    """

    @abstractmethod
    def build(self, source: Any) -> str:
        """Build a context string.

        Args:
            source: Pipeline data to describe

        Returns:
            Formatted text
        """
        pass
