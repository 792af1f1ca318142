# medassist/application/commands.py
from pydantic import BaseModel


class ResolutionQuery(BaseModel):
    name: str = ""
    model: str | None = None    # suggestion-service model id (optional)


class AddMedicationCommand(BaseModel):
    name: str | None = None
    quantity_in_stock: int | None = None
    price: float = 0.0
    dosage_frequency: str | None = None
    usage_instructions: str | None = None
    food_warnings: str | None = None
