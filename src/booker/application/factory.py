"""
Service Factory
Centralizes wiring of stores and collaborators from configuration.
"""

from booker.domain.ports import ItemStore, Notifier
from booker.infrastructure.adapters import (
    ConsoleNotifier,
    JsonFileStore,
    JsonStateStore,
    TieredStore,
    YamlFileStore,
)
from booker.infrastructure.transfer import TextTransfer

from .config import AppConfig
from .service import StudyService


def get_item_store(config: AppConfig) -> ItemStore:
    """JSON file first, YAML copy as fallback."""
    return TieredStore(
        primary=JsonFileStore(config.primary_path),
        fallback=YamlFileStore(config.fallback_path),
    )


def get_study_service(
    config: AppConfig,
    notifier: Notifier | None = None,
    interactive: bool = True,
) -> StudyService:
    state_store = JsonStateStore(config.state_path)
    if notifier is None:
        notifier = ConsoleNotifier(
            granted=state_store.load().notifications_granted,
            interactive=interactive,
        )
    return StudyService(get_item_store(config), state_store, notifier, codec=TextTransfer())
