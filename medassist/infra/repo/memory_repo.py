# medassist/infra/repo/memory_repo.py
from __future__ import annotations

from typing import Iterable, List, Optional

from medassist.domain.errors import DuplicateMedicationError
from medassist.domain.models import MedicationRecord
from medassist.domain.ports import InventoryPort


class InMemoryInventoryRepo(InventoryPort):
    """Process-local inventory for dev mode (INVENTORY_BACKEND=memory) and tests."""

    def __init__(self, records: Iterable[MedicationRecord] = ()):
        self._items: List[MedicationRecord] = []
        for r in records:
            self._add(r)

    def _add(self, record: MedicationRecord) -> None:
        if any(r.name_key == record.name_key for r in self._items):
            raise DuplicateMedicationError(record.name)
        self._items.append(record)

    async def ensure_indexes(self) -> None:
        return None

    async def find_exact(self, name: str) -> Optional[MedicationRecord]:
        key = (name or "").strip().lower()
        if not key:
            return None
        return next((r for r in self._items if r.name_key == key), None)

    async def find_exact_in_stock(self, name: str) -> Optional[MedicationRecord]:
        rec = await self.find_exact(name)
        return rec if rec and rec.in_stock else None

    async def list_all(self) -> List[MedicationRecord]:
        return list(self._items)

    async def insert(self, record: MedicationRecord) -> MedicationRecord:
        self._add(record)
        return record
