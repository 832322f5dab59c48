import json
import logging
from pathlib import Path
from typing import Iterable

from .session import Turn

logger = logging.getLogger(__name__)

STORAGE_KEY = "chatHistory"


class TranscriptStore:
    """Local JSON cache of the chat transcript, stored under a fixed key."""

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def load(self) -> list[Turn]:
        if not self.path.exists():
            return []
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            return [Turn.from_dict(d) for d in data.get(STORAGE_KEY, [])]
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            logger.warning("ignoring unreadable transcript at %s: %s", self.path, e)
            return []

    def save(self, turns: Iterable[Turn]):
        history = [t.to_dict() for t in turns if not t.pending]
        self.path.write_text(json.dumps({STORAGE_KEY: history}, ensure_ascii=False), encoding="utf-8")
