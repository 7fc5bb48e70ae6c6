# Infrastructure Adapters Package
from .console_notifier import ConsoleNotifier
from .file_stores import JsonFileStore, YamlFileStore
from .state_store import JsonStateStore
from .tiered_store import TieredStore

__all__ = ["ConsoleNotifier", "JsonFileStore", "JsonStateStore", "TieredStore", "YamlFileStore"]
