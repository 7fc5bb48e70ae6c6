"""JSON-file StateStore for the simulated day offset and notification bookkeeping."""

import json
import logging
from dataclasses import asdict
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from booker.domain.models import SessionState
from booker.domain.ports import StateStore

from .file_stores import _write_atomic

logger = logging.getLogger(__name__)

_STATE = TypeAdapter(SessionState)


class JsonStateStore(StateStore):
    def __init__(self, path: Path):
        self.path = Path(path)

    def load(self) -> SessionState:
        """A missing, unreadable or invalid state file yields the default state."""
        if not self.path.exists():
            return SessionState()

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring corrupt state file {self.path}: {e}")
            return SessionState()

        if not isinstance(data, dict):
            logger.warning(f"Ignoring state file {self.path}: expected an object")
            return SessionState()

        # Unknown keys are dropped; wrongly typed values reject the whole file.
        try:
            return _STATE.validate_python(data)
        except ValidationError as e:
            logger.warning(f"Ignoring invalid state file {self.path}: {e.error_count()} error(s)")
            return SessionState()

    def save(self, state: SessionState) -> None:
        _write_atomic(self.path, json.dumps(asdict(state), indent=2))
