# medassist/domain/models.py
from __future__ import annotations

import datetime as dt

from pydantic import BaseModel, Field, field_validator


class MedicationRecord(BaseModel):
    name: str
    quantity_in_stock: int = Field(0, ge=0)
    price: float = Field(0.0, ge=0)
    dosage_frequency: str | None = None     # e.g. "Every 6 hours", "Twice a day"
    usage_instructions: str | None = None   # e.g. "Take with food"
    food_warnings: str | None = None        # e.g. "Avoid grapefruit juice"
    created_at: dt.datetime | None = None

    @field_validator("name")
    @classmethod
    def _strip_name(cls, v: str) -> str:
        v = (v or "").strip()
        if not v:
            raise ValueError("name must not be empty")
        return v

    @field_validator("dosage_frequency", "usage_instructions", "food_warnings")
    @classmethod
    def _strip_text(cls, v: str | None) -> str | None:
        return v.strip() if isinstance(v, str) else v

    @property
    def name_key(self) -> str:
        """Case-insensitive identity used for uniqueness."""
        return self.name.lower()

    @property
    def in_stock(self) -> bool:
        return self.quantity_in_stock > 0
