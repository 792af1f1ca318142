# medassist/presentation/schemas.py
from __future__ import annotations
from pydantic import BaseModel, Field
from typing import List, Optional


# ── ADD MEDICINE ──────────────────────────────────────────────────
class AddMedicationRequest(BaseModel):
    name: Optional[str] = Field(None, description="Tablet (brand) name")
    quantity_in_stock: Optional[int] = Field(None, description="Units on hand, >= 0")
    price: float = Field(0.0, description="Unit price, >= 0")
    dosage_frequency: Optional[str] = Field(None, description='e.g. "Every 6 hours"')
    usage_instructions: Optional[str] = Field(None, description='e.g. "Take with food"')
    food_warnings: Optional[str] = Field(None, description='e.g. "Avoid grapefruit juice"')


class MedicationOut(BaseModel):
    name: str
    quantity_in_stock: int
    price: float
    dosage_frequency: Optional[str] = None
    usage_instructions: Optional[str] = None
    food_warnings: Optional[str] = None
    created_at: Optional[str] = None


class AddMedicationResponse(BaseModel):
    msg: str
    medicine: MedicationOut


# ── CHECK (resolution outcome) ────────────────────────────────────
class CheckResponse(BaseModel):
    status: str
    message: str
    data: Optional[MedicationOut] = None           # available_locally / alternative_available_locally
    suggestions: Optional[List[str]] = None        # similar names or suggested substitutes
    disclaimer: Optional[str] = None
    degraded: Optional[bool] = None                # True → substitutes came from the fallback list


class ErrorResponse(BaseModel):
    status: str
    error: str
    details: Optional[str] = None
