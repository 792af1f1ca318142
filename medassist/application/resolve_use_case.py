# medassist/application/resolve_use_case.py
from __future__ import annotations

import logging
from typing import Optional

from medassist.domain.errors import InputError
from medassist.domain.outcomes import (
    AlternativeAvailableLocally,
    AvailableLocally,
    NotAvailableAnywhere,
    ResolutionOutcome,
    SimilarExistInStock,
)
from medassist.domain.ports import InventoryPort, SuggesterPort
from medassist.domain.services.fuzzy_matcher import FuzzyMatcher

from .commands import ResolutionQuery

logger = logging.getLogger("medassist.resolve")

MAX_SIMILAR = 3
MAX_CANDIDATES = 3


class ResolveAvailabilityUseCase:
    """
    Exact in-stock → fuzzy over the whole catalog → suggested substitutes
    re-checked in stock. First stage with a positive result wins.
    """

    def __init__(
        self,
        inventory: InventoryPort,
        suggester: SuggesterPort,
        matcher: Optional[FuzzyMatcher] = None,
    ):
        self.inventory = inventory
        self.suggester = suggester
        self.matcher = matcher or FuzzyMatcher()

    async def resolve(self, query: ResolutionQuery) -> ResolutionOutcome:
        name = (query.name or "").strip()
        if not name:
            raise InputError("Medicine name query parameter is required.")

        # 1) Exact match in stock
        rec = await self.inventory.find_exact_in_stock(name)
        if rec:
            logger.info("[resolve] q=%s stage=exact hit=%s", name, rec.name)
            return AvailableLocally(query=name, record=rec)

        # 2) Fuzzy over the full snapshot (stock ignored)
        catalog = await self.inventory.list_all()
        hits = self.matcher.search(name, catalog)[:MAX_SIMILAR]
        if hits:
            logger.info("[resolve] q=%s stage=fuzzy hits=%s", name, [(h.name, h.score) for h in hits])
            return SimilarExistInStock(query=name, suggestions=tuple(h.name for h in hits))

        # 3) Substitutes from the suggestion service
        model = self.suggester.resolve_model(query.model)
        logger.info("[resolve] q=%s not found locally; asking suggester model=%s", name, model)
        suggestion = await self.suggester.suggest(name, model)
        candidates = tuple(suggestion.names[:MAX_CANDIDATES])

        for alt in candidates:
            alt_rec = await self.inventory.find_exact_in_stock(alt)
            if alt_rec:
                logger.info(
                    "[resolve] q=%s stage=substitute hit=%s model=%s degraded=%s",
                    name, alt_rec.name, suggestion.model, suggestion.degraded,
                )
                return AlternativeAvailableLocally(
                    query=name,
                    record=alt_rec,
                    suggested_name=alt,
                    degraded=suggestion.degraded,
                )

        logger.info(
            "[resolve] q=%s stage=exhausted candidates=%s model=%s degraded=%s",
            name, list(candidates), suggestion.model, suggestion.degraded,
        )
        return NotAvailableAnywhere(query=name, suggestions=candidates, degraded=suggestion.degraded)
