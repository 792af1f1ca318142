# medassist/application/inventory_use_case.py
from __future__ import annotations

import datetime as dt
import logging

from pydantic import ValidationError

from medassist.domain.errors import DuplicateMedicationError, InputError
from medassist.domain.models import MedicationRecord
from medassist.domain.ports import InventoryPort

from .commands import AddMedicationCommand

logger = logging.getLogger("medassist.inventory")


class AddMedicationUseCase:
    def __init__(self, inventory: InventoryPort):
        self.inventory = inventory

    async def execute(self, cmd: AddMedicationCommand) -> MedicationRecord:
        name = (cmd.name or "").strip()
        if not name or cmd.quantity_in_stock is None:
            raise InputError("Tablet name and quantity are required.")

        if await self.inventory.find_exact(name):
            raise DuplicateMedicationError(name)

        try:
            rec = MedicationRecord(
                name=name,
                quantity_in_stock=cmd.quantity_in_stock,
                price=cmd.price,
                dosage_frequency=cmd.dosage_frequency,
                usage_instructions=cmd.usage_instructions,
                food_warnings=cmd.food_warnings,
                created_at=dt.datetime.now(dt.timezone.utc),
            )
        except ValidationError as e:
            raise InputError(str(e)) from e

        # the store's unique index still catches a concurrent insert
        saved = await self.inventory.insert(rec)
        logger.info("[inventory] added name=%s qty=%s", saved.name, saved.quantity_in_stock)
        return saved
