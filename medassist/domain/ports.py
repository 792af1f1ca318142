# medassist/domain/ports.py
from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .models import MedicationRecord


class InventoryPort(ABC):
    """Read side used by the resolution pipeline, plus the add path."""
    @abstractmethod
    async def ensure_indexes(self) -> None: ...

    @abstractmethod
    async def find_exact(self, name: str) -> Optional[MedicationRecord]: ...

    @abstractmethod
    async def find_exact_in_stock(self, name: str) -> Optional[MedicationRecord]: ...

    @abstractmethod
    async def list_all(self) -> List[MedicationRecord]: ...

    @abstractmethod
    async def insert(self, record: MedicationRecord) -> MedicationRecord: ...


@dataclass(frozen=True)
class Suggestion:
    names: Tuple[str, ...] = field(default_factory=tuple)
    model: Optional[str] = None
    degraded: bool = False          # True → names came from the fallback list


class SuggesterPort(ABC):
    @abstractmethod
    def resolve_model(self, model: Optional[str]) -> str:
        """Return the model to use; raise InputError if it is not allowed."""

    @abstractmethod
    async def suggest(self, name: str, model: Optional[str] = None) -> Suggestion: ...
