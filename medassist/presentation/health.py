# medassist/presentation/health.py
from fastapi import APIRouter, Depends
from medassist.container import get_resolve_uc

router = APIRouter()

@router.get("/healthz")
async def healthz():
    return {"ok": True}

@router.get("/readyz")
async def readyz(uc = Depends(get_resolve_uc)):
    checks = {}; ok = True
    # Inventory store
    try:
        await uc.inventory.ensure_indexes()
        checks["inventory"] = True
    except Exception as e:
        checks["inventory"] = False; checks["inventory_error"] = str(e); ok = False
    # Suggestion service configured (not called)
    checks["suggester_configured"] = bool(getattr(uc.suggester, "configured", True))
    return {"ok": ok, **checks}
