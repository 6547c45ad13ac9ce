import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol

# This file holds the collection stores: one JSON array per file on disk,
# plus an in-memory store with the same load/save interface for tests.

logger = logging.getLogger(__name__)

Record = Dict[str, Any]


class ResourceStore(Protocol):
    def load(self) -> List[Record]: ...

    def save(self, records: List[Record]) -> None: ...


class JsonFileStore:
    """Loads and saves one collection as a JSON array file.

    Read failures (missing file, bad JSON, non-array content) are logged and
    give an empty collection. Write failures are logged and dropped, so the
    caller carries on as if the write went through.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def load(self) -> List[Record]:
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError):
            logger.exception("Failed to read collection file %s", self.path)
            return []
        if not isinstance(data, list):
            logger.error("Collection file %s does not hold a JSON array", self.path)
            return []
        return data

    def save(self, records: List[Record]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("w", encoding="utf-8") as f:
                json.dump(records, f, indent=2, ensure_ascii=False)
        except (OSError, TypeError, ValueError):
            logger.exception("Failed to write collection file %s", self.path)


class MemoryStore:
    """Keeps a collection in a list; loads hand out copies like a file would."""

    def __init__(self, records: Optional[List[Record]] = None):
        self.records: List[Record] = [dict(r) for r in (records or [])]
        self.saves = 0

    def load(self) -> List[Record]:
        return [dict(r) for r in self.records]

    def save(self, records: List[Record]) -> None:
        self.records = [dict(r) for r in records]
        self.saves += 1
