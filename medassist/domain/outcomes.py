# medassist/domain/outcomes.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Tuple, Union

from .models import MedicationRecord

DISCLAIMER = (
    "⚠️ For informational purposes only. "
    "Consult a healthcare professional before substituting."
)


class OutcomeStatus(str, Enum):
    AVAILABLE_LOCALLY = "available_locally"
    SIMILAR_EXIST = "not_found_but_similar_exist"
    ALTERNATIVE_AVAILABLE = "alternative_available_locally"
    NOT_AVAILABLE = "not_available_locally_and_no_stocked_alternatives"


@dataclass(frozen=True)
class AvailableLocally:
    query: str
    record: MedicationRecord

    status = OutcomeStatus.AVAILABLE_LOCALLY

    @property
    def message(self) -> str:
        return f"'{self.query}' is available in your inventory."

    def to_payload(self) -> Dict[str, Any]:
        return {
            "status": self.status.value,
            "message": self.message,
            "data": self.record.model_dump(mode="json"),
        }


@dataclass(frozen=True)
class SimilarExistInStock:
    query: str
    suggestions: Tuple[str, ...]     # catalog names, any stock level

    status = OutcomeStatus.SIMILAR_EXIST

    @property
    def message(self) -> str:
        return f"'{self.query}' not found, but here are some close matches in your stock:"

    def to_payload(self) -> Dict[str, Any]:
        return {
            "status": self.status.value,
            "message": self.message,
            "suggestions": list(self.suggestions),
        }


@dataclass(frozen=True)
class AlternativeAvailableLocally:
    query: str
    record: MedicationRecord
    suggested_name: str
    disclaimer: str = DISCLAIMER
    degraded: bool = False

    status = OutcomeStatus.ALTERNATIVE_AVAILABLE

    @property
    def message(self) -> str:
        return (
            f"'{self.query}' not found, but the suggestion service proposed "
            f"'{self.suggested_name}' which is in stock."
        )

    def to_payload(self) -> Dict[str, Any]:
        return {
            "status": self.status.value,
            "message": self.message,
            "data": self.record.model_dump(mode="json"),
            "disclaimer": self.disclaimer,
            "degraded": self.degraded,
        }


@dataclass(frozen=True)
class NotAvailableAnywhere:
    query: str
    suggestions: Tuple[str, ...]     # candidates considered, possibly empty
    disclaimer: str = DISCLAIMER
    degraded: bool = False

    status = OutcomeStatus.NOT_AVAILABLE

    @property
    def message(self) -> str:
        return f"'{self.query}' not found. Checked suggested alternatives, none are in stock."

    def to_payload(self) -> Dict[str, Any]:
        return {
            "status": self.status.value,
            "message": self.message,
            "suggestions": list(self.suggestions),
            "disclaimer": self.disclaimer,
            "degraded": self.degraded,
        }


ResolutionOutcome = Union[
    AvailableLocally,
    SimilarExistInStock,
    AlternativeAvailableLocally,
    NotAvailableAnywhere,
]
