import logging
import re
import secrets
import string
from typing import Any, Dict, List, Optional

from .database import Record, ResourceStore
from .errors import NotFoundError

# This file contains the collection logic shared by the products and users endpoints.

logger = logging.getLogger(__name__)

URL_SAFE_ALPHABET = string.ascii_letters + string.digits + "_-"

PRODUCT_NOT_FOUND = "Товар не найден"
PRODUCT_DELETED = "Товар удален"
USER_NOT_FOUND = "Пользователь не найден"
USER_DELETED = "Пользователь удален"


# ---------------------------
# Id policies
# ---------------------------
class SequentialIds:
    """Integer ids: max existing id + 1, starting at 1."""

    def parse(self, raw: str) -> Optional[int]:
        # leading integer prefix: "12abc" -> 12, "1.0" -> 1, "1_2" -> 1
        match = re.match(r"\s*([+-]?\d+)", raw, re.ASCII)
        if match is None:
            return None
        return int(match.group(1))

    def next_id(self, records: List[Record]) -> int:
        ids = [
            r["id"] for r in records
            if isinstance(r, dict) and isinstance(r.get("id"), int) and not isinstance(r.get("id"), bool)
        ]
        return max(ids, default=0) + 1


class RandomTokenIds:
    """Short random string ids. Existing ids are not checked for collisions."""

    def __init__(self, size: int = 6, alphabet: str = URL_SAFE_ALPHABET):
        self.size = size
        self.alphabet = alphabet

    def parse(self, raw: str) -> str:
        return raw

    def next_id(self, records: List[Record]) -> str:
        return "".join(secrets.choice(self.alphabet) for _ in range(self.size))


# ---------------------------
# Collection
# ---------------------------
class ResourceCollection:
    def __init__(self, name: str, store: ResourceStore, ids, not_found_message: str, deleted_message: str):
        self.name = name
        self.store = store
        self.ids = ids
        self.not_found_message = not_found_message
        self.deleted_message = deleted_message

    def _index(self, records: List[Record], raw_id: str) -> int:
        record_id = self.ids.parse(raw_id)
        if record_id is not None:
            for i, r in enumerate(records):
                if isinstance(r, dict) and not isinstance(r.get("id"), bool) and r.get("id") == record_id:
                    return i
        raise NotFoundError(self.not_found_message)

    def list(self) -> List[Record]:
        return self.store.load()

    def get(self, raw_id: str) -> Record:
        records = self.store.load()
        return records[self._index(records, raw_id)]

    def create(self, body: Dict[str, Any]) -> Record:
        records = self.store.load()
        record: Record = {"id": self.ids.next_id(records)}
        record.update((k, v) for k, v in body.items() if k != "id")
        records.append(record)
        self.store.save(records)
        logger.info("Created %s record %s", self.name, record["id"], extra={"collection": self.name})
        return record

    def update(self, raw_id: str, body: Dict[str, Any]) -> Record:
        records = self.store.load()
        i = self._index(records, raw_id)
        original_id = records[i]["id"]
        # shallow merge; the id never changes
        merged = {**records[i], **body}
        merged["id"] = original_id
        records[i] = merged
        self.store.save(records)
        logger.info("Updated %s record %s", self.name, original_id, extra={"collection": self.name})
        return merged

    def delete(self, raw_id: str) -> Dict[str, str]:
        records = self.store.load()
        removed = records.pop(self._index(records, raw_id))
        self.store.save(records)
        logger.info("Deleted %s record %s", self.name, removed["id"], extra={"collection": self.name})
        return {"message": self.deleted_message}


def product_collection(store: ResourceStore) -> ResourceCollection:
    return ResourceCollection("products", store, SequentialIds(), PRODUCT_NOT_FOUND, PRODUCT_DELETED)

def user_collection(store: ResourceStore) -> ResourceCollection:
    return ResourceCollection("users", store, RandomTokenIds(), USER_NOT_FOUND, USER_DELETED)
