from __future__ import annotations

import asyncio
from typing import List, Optional, Sequence

import pytest

from medassist.domain.errors import InputError
from medassist.domain.models import MedicationRecord
from medassist.domain.ports import Suggestion, SuggesterPort
from medassist.domain.services.fuzzy_matcher import FuzzyMatcher
from medassist.infra.llm.openai_suggester import parse_suggestions
from medassist.infra.repo.memory_repo import InMemoryInventoryRepo

ALLOWED = ("gemini-1.5-flash", "gemini-1.5-pro")


###############################################################################
class StubSuggester(SuggesterPort):
    """Returns a fixed raw reply (parsed like the real one) or raises."""

    def __init__(self, raw: str = "None", *, names: Optional[Sequence[str]] = None,
                 error: Exception | None = None, degraded: bool = False, delay: float = 0.0):
        self.raw = raw
        self.names = names
        self.error = error
        self.degraded = degraded
        self.delay = delay
        self.calls: List[tuple] = []

    def resolve_model(self, model: Optional[str]) -> str:
        chosen = (model or "").strip() or ALLOWED[0]
        if chosen not in ALLOWED:
            raise InputError(f"Invalid model '{chosen}'.")
        return chosen

    async def suggest(self, name: str, model: Optional[str] = None) -> Suggestion:
        self.calls.append((name, model))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        names = tuple(self.names) if self.names is not None else tuple(parse_suggestions(self.raw))
        return Suggestion(names=names, model=model, degraded=self.degraded)


###############################################################################
class CountingInventory(InMemoryInventoryRepo):
    def __init__(self, records=()):
        super().__init__(records)
        self.in_stock_lookups: List[str] = []
        self.scans = 0

    async def find_exact_in_stock(self, name: str):
        self.in_stock_lookups.append(name)
        return await super().find_exact_in_stock(name)

    async def list_all(self):
        self.scans += 1
        return await super().list_all()


###############################################################################
class CountingMatcher(FuzzyMatcher):
    def __init__(self):
        super().__init__()
        self.calls = 0

    def search(self, query, catalog):
        self.calls += 1
        return super().search(query, catalog)


def med(name: str, qty: int = 0, price: float = 1.0) -> MedicationRecord:
    return MedicationRecord(name=name, quantity_in_stock=qty, price=price)


@pytest.fixture
def make_inventory():
    def _make(*records: MedicationRecord) -> CountingInventory:
        return CountingInventory(records)
    return _make
