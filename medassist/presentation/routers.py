# medassist/presentation/routers.py
from __future__ import annotations

import asyncio
import logging

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from medassist.application.commands import AddMedicationCommand, ResolutionQuery
from medassist.application.inventory_use_case import AddMedicationUseCase
from medassist.application.resolve_use_case import ResolveAvailabilityUseCase
from medassist.container import get_add_medication_uc, get_resolve_uc, resolve_timeout
from medassist.domain.errors import DuplicateMedicationError, InputError, SuggestionServiceError
from medassist.presentation.schemas import (
    AddMedicationRequest, AddMedicationResponse, CheckResponse, ErrorResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/medicines", tags=["medicines"])

_ERRORS = {400: {"model": ErrorResponse}, 502: {"model": ErrorResponse}, 503: {"model": ErrorResponse}}


def _error(status_code: int, label: str, error: str, details: str | None = None) -> JSONResponse:
    body = {"status": label, "error": error}
    if details:
        body["details"] = details
    return JSONResponse(status_code=status_code, content=body)


# ── ADD MEDICINE ──────────────────────────────────────────────────
@router.post("", status_code=201, response_model=AddMedicationResponse, responses=_ERRORS)
async def add_medicine(
    req: AddMedicationRequest,
    uc: AddMedicationUseCase = Depends(get_add_medication_uc),
):
    try:
        rec = await uc.execute(AddMedicationCommand(**req.model_dump()))
    except DuplicateMedicationError as e:
        return _error(400, "duplicate", str(e))
    except InputError as e:
        return _error(400, "invalid_input", str(e))
    except Exception as e:
        logger.exception("add medicine failed")
        return _error(500, "server_error", "Server error", str(e))
    return {"msg": f"'{rec.name}' added successfully.", "medicine": rec.model_dump(mode="json")}


# ── CHECK: exact → fuzzy → substitutes ────────────────────────────
@router.get("/check", response_model=CheckResponse, response_model_exclude_none=True, responses=_ERRORS)
async def check_medicine(
    name: str | None = Query(None, description="Medicine name to look up"),
    model: str | None = Query(None, description="Suggestion-service model id"),
    uc: ResolveAvailabilityUseCase = Depends(get_resolve_uc),
):
    query = ResolutionQuery(name=name or "", model=model)
    try:
        outcome = await asyncio.wait_for(uc.resolve(query), timeout=resolve_timeout())
    except InputError as e:
        return _error(400, "invalid_input", str(e))
    except SuggestionServiceError as e:
        logger.error("[check] q=%s suggestion service failed model=%s: %s", name, e.model, e.message)
        return _error(502, "suggestion_service_error",
                      "Error communicating with the suggestion service.", e.message)
    except asyncio.TimeoutError:
        logger.warning("[check] q=%s timed out after %.1fs", name, resolve_timeout())
        return _error(503, "service_unavailable", "The search could not be completed in time.")
    except Exception as e:
        logger.exception("[check] q=%s failed", name)
        return _error(500, "server_error", "Server error", str(e))
    return outcome.to_payload()
