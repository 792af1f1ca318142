# main.py
from dotenv import load_dotenv
load_dotenv()

import os
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

# --- logging config must come before the router imports ---
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

from medassist.presentation.routers import router as medicines_router
from medassist.presentation.health import router as health_router
from medassist import container

app = FastAPI(
    title="MedAssist",
    version=os.getenv("APP_VERSION", "0.1.0"),
)

app_logger = logging.getLogger("medassist.request")

@app.middleware("http")
async def log_requests(request: Request, call_next):
    app_logger.info(f"➡️ Incoming {request.method} {request.url.path}")
    try:
        response = await call_next(request)
        app_logger.info(f"⬅️ Completed {request.method} {request.url.path} -> {response.status_code}")
        return response
    except Exception:
        app_logger.exception(f"❌ Unhandled error on {request.method} {request.url.path}")
        raise

# ─────────────────────────────────────────────────────────────
# CORS (CORS_ALLOW_ORIGINS="https://foo.com,https://bar.com", default all)
# ─────────────────────────────────────────────────────────────
raw_origins = os.getenv("CORS_ALLOW_ORIGINS", "*")
allow_origins = [o.strip().rstrip("/") for o in raw_origins.split(",") if o.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=allow_origins,
    allow_credentials="*" not in allow_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ─────────────────────────────────────────────────────────────
# Startup: unique name index must exist before the first insert
# ─────────────────────────────────────────────────────────────
@app.on_event("startup")
async def ensure_indexes():
    await container.get_inventory().ensure_indexes()
    app_logger.info("✅ Inventory indexes ensured")

# ─────────────────────────────────────────────────────────────
# Routes
# ─────────────────────────────────────────────────────────────
app.include_router(medicines_router)
app.include_router(health_router, tags=["health"])

@app.get("/")
async def root():
    return {
        "name": "MedAssist",
        "message": "Hello from Medical Store Assistant API!",
        "version": os.getenv("APP_VERSION", "0.1.0"),
        "ok": True,
    }
