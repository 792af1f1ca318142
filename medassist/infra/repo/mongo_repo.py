# medassist/infra/repo/mongo_repo.py
from __future__ import annotations

import re
from typing import Any, Dict, List, Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection
from pymongo import ASCENDING
from pymongo.errors import DuplicateKeyError

from medassist.domain.errors import DuplicateMedicationError
from medassist.domain.models import MedicationRecord
from medassist.domain.ports import InventoryPort

_PROJECTION = {
    "_id": 0,
    "name": 1,
    "quantity_in_stock": 1,
    "price": 1,
    "dosage_frequency": 1,
    "usage_instructions": 1,
    "food_warnings": 1,
    "created_at": 1,
}


def _exact_name(name: str) -> Dict[str, Any]:
    # case-insensitive full-string match; name is escaped, never a pattern
    return {"name": {"$regex": f"^{re.escape(name.strip())}$", "$options": "i"}}


def _to_record(doc: Optional[Dict[str, Any]]) -> Optional[MedicationRecord]:
    return MedicationRecord(**doc) if doc else None


class MongoInventoryRepo(InventoryPort):
    """
    Async repository for the `medicines` collection.

    Documents carry a lower-cased `name_key` mirror of `name`; its unique
    index enforces case-insensitive uniqueness on insert.
    """

    def __init__(
        self,
        uri: str = "mongodb://localhost:27017",
        db_name: str = "medassist",
        coll_name: str = "medicines",
        client: AsyncIOMotorClient | None = None,
    ) -> None:
        self.client = client or AsyncIOMotorClient(uri)
        self.db = self.client[db_name]
        self.coll: AsyncIOMotorCollection = self.db[coll_name]

    # ──────────────────────────────────────────────────────────────
    #  Indexing
    # ──────────────────────────────────────────────────────────────
    async def ensure_indexes(self) -> None:
        await self.coll.create_index([("name_key", ASCENDING)], unique=True)
        await self.coll.create_index([("quantity_in_stock", ASCENDING)])

    # ──────────────────────────────────────────────────────────────
    #  Exact lookups
    # ──────────────────────────────────────────────────────────────
    async def find_exact(self, name: str) -> Optional[MedicationRecord]:
        if not name or not name.strip():
            return None
        doc = await self.coll.find_one(_exact_name(name), _PROJECTION)
        return _to_record(doc)

    async def find_exact_in_stock(self, name: str) -> Optional[MedicationRecord]:
        if not name or not name.strip():
            return None
        query = {**_exact_name(name), "quantity_in_stock": {"$gt": 0}}
        doc = await self.coll.find_one(query, _PROJECTION)
        return _to_record(doc)

    # ──────────────────────────────────────────────────────────────
    #  Snapshot (insertion order, used by the fuzzy stage)
    # ──────────────────────────────────────────────────────────────
    async def list_all(self) -> List[MedicationRecord]:
        cursor = self.coll.find({}, _PROJECTION).sort("_id", ASCENDING)
        return [MedicationRecord(**doc) async for doc in cursor]

    # ──────────────────────────────────────────────────────────────
    #  Write path
    # ──────────────────────────────────────────────────────────────
    async def insert(self, record: MedicationRecord) -> MedicationRecord:
        doc = record.model_dump()
        doc["name_key"] = record.name_key
        try:
            await self.coll.insert_one(doc)
        except DuplicateKeyError as e:
            raise DuplicateMedicationError(record.name) from e
        return record
