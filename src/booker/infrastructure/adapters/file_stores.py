"""
File-backed item stores.

Implements ItemStore on top of a single JSON or YAML file. Both formats share
the camelCase wire format from ``booker.infrastructure.serialization``.
"""

import json
import logging
import os
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import yaml

from booker.domain.errors import ImportRejected
from booker.domain.models import ReviewItem
from booker.domain.ports import ItemStore
from booker.infrastructure.serialization import items_from_payload, items_to_payload

logger = logging.getLogger(__name__)


def _write_atomic(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_name(path.name + ".tmp")
    tmp.write_text(text, encoding="utf-8")
    os.replace(tmp, path)


class _FileStore(ItemStore):
    format_name = ""

    def __init__(self, path: Path):
        self.path = Path(path)

    def _decode(self, text: str) -> Any:
        raise NotImplementedError

    def _encode(self, payload: list[dict[str, Any]]) -> str:
        raise NotImplementedError

    def load(self) -> list[ReviewItem] | None:
        """
        Returns None when the file does not exist.

        Raises:
            ImportRejected: if the file exists but cannot be read or does not
                hold a valid collection.
        """
        if not self.path.exists():
            return None

        try:
            payload = self._decode(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError, yaml.YAMLError) as e:
            # UnicodeDecodeError is a ValueError
            raise ImportRejected(f"Could not parse {self.format_name} in {self.path}: {e}") from e

        items = items_from_payload(payload)
        logger.debug(f"Loaded {len(items)} items from {self.path}")
        return items

    def save(self, items: Sequence[ReviewItem]) -> None:
        _write_atomic(self.path, self._encode(items_to_payload(items)))
        logger.debug(f"Saved {len(items)} items to {self.path}")


class JsonFileStore(_FileStore):
    """Primary store: one JSON document holding the whole collection."""

    format_name = "JSON"

    def _decode(self, text: str) -> Any:
        return json.loads(text)

    def _encode(self, payload: list[dict[str, Any]]) -> str:
        return json.dumps(payload, indent=2, ensure_ascii=False)


class YamlFileStore(_FileStore):
    """Secondary store: a YAML copy of the collection."""

    format_name = "YAML"

    def _decode(self, text: str) -> Any:
        return yaml.safe_load(text)

    def _encode(self, payload: list[dict[str, Any]]) -> str:
        return yaml.safe_dump(payload, sort_keys=False, allow_unicode=True)
