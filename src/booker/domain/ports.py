"""
Ports (interfaces) for persistence, bulk transfer and notifications.

These define the contract that infrastructure adapters must implement.
Application services depend on these abstractions, not concrete implementations.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Literal

from .models import ReviewItem, SessionState

TextFormat = Literal["json", "yaml"]


class ItemStore(ABC):
    """
    Port for loading and saving the item collection.

    Implementations:
        - JsonFileStore: Primary JSON file.
        - YamlFileStore: Secondary YAML copy.
        - TieredStore: Primary-then-fallback composition of two stores.
    """

    @abstractmethod
    def load(self) -> list[ReviewItem] | None:
        """
        Load the stored collection.

        Returns:
            The items, or None when nothing usable is stored.
        """
        pass

    @abstractmethod
    def save(self, items: Sequence[ReviewItem]) -> None:
        """Persist the full collection, replacing whatever was stored."""
        pass


class StateStore(ABC):
    """Port for session state (simulated day offset, notification bookkeeping)."""

    @abstractmethod
    def load(self) -> SessionState:
        pass

    @abstractmethod
    def save(self, state: SessionState) -> None:
        pass


class Notifier(ABC):
    """
    Port for the notification collaborator.

    The core supplies title and body text; permission UI is the adapter's concern.
    """

    @abstractmethod
    def request_permission(self) -> bool:
        """Ask the user for permission. Returns True when granted."""
        pass

    @abstractmethod
    def notify(self, title: str, body: str) -> None:
        """Deliver a notification. Must be a no-op when permission is not granted."""
        pass


class ItemCodec(ABC):
    """
    Port for the bulk export/import text format.

    Implementations:
        - TextTransfer: JSON or YAML text in the stored wire format.
    """

    @abstractmethod
    def export_text(self, items: Sequence[ReviewItem], fmt: TextFormat = "json") -> str:
        pass

    @abstractmethod
    def import_text(self, text: str, fmt: TextFormat = "json") -> list[ReviewItem]:
        """
        Parse a complete replacement collection.

        Raises:
            ImportRejected: on malformed text or any invalid item.
        """
        pass
