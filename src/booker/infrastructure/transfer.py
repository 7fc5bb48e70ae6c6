"""
Bulk export and import of the whole item collection.

Export produces a human-editable text block; import parses the same block and
returns a complete replacement collection. Import never merges: callers swap
their collection only after this module returns successfully.
"""

import json
import logging
from collections.abc import Sequence

import yaml

from booker.domain.errors import ImportRejected
from booker.domain.models import ReviewItem
from booker.domain.ports import ItemCodec, TextFormat
from booker.infrastructure.serialization import items_from_payload, items_to_payload

logger = logging.getLogger(__name__)


def export_items(items: Sequence[ReviewItem], fmt: TextFormat = "json") -> str:
    payload = items_to_payload(items)
    if fmt == "yaml":
        return yaml.safe_dump(payload, sort_keys=False, allow_unicode=True)
    return json.dumps(payload, indent=2, ensure_ascii=False)


def import_items(text: str, fmt: TextFormat = "json") -> list[ReviewItem]:
    """
    Parse an exported text block into a replacement collection.

    Raises:
        ImportRejected: on a parse error, a payload that is not a list,
            or any invalid item.
    """
    if not text or not text.strip():
        raise ImportRejected("Nothing to import.")

    try:
        payload = yaml.safe_load(text) if fmt == "yaml" else json.loads(text)
    except (ValueError, yaml.YAMLError) as e:
        raise ImportRejected(f"Could not parse {fmt.upper()}: {e}") from e

    items = items_from_payload(payload)
    logger.info(f"Parsed {len(items)} items from {fmt} import")
    return items


class TextTransfer(ItemCodec):
    """ItemCodec over the functions above."""

    def export_text(self, items: Sequence[ReviewItem], fmt: TextFormat = "json") -> str:
        return export_items(items, fmt)

    def import_text(self, text: str, fmt: TextFormat = "json") -> list[ReviewItem]:
        return import_items(text, fmt)
