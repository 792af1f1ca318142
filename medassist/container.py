# medassist/container.py
import os
from functools import lru_cache

from medassist.domain.ports import InventoryPort
from medassist.domain.services.fuzzy_matcher import FuzzyMatcher
from medassist.infra.llm.openai_suggester import (
    DEFAULT_ALLOWED_MODELS, DEFAULT_BASE_URL, DEFAULT_FALLBACK, DEFAULT_MODEL,
    OpenAISuggester,
)
from medassist.infra.repo.memory_repo import InMemoryInventoryRepo
from medassist.infra.repo.mongo_repo import MongoInventoryRepo

from medassist.application.inventory_use_case import AddMedicationUseCase
from medassist.application.resolve_use_case import ResolveAvailabilityUseCase


def _csv_env(key: str, default) -> tuple:
    raw = os.getenv(key)
    if raw is None:
        return tuple(default)
    return tuple(p.strip() for p in raw.split(",") if p.strip())


@lru_cache
def _inventory() -> InventoryPort:
    if os.getenv("INVENTORY_BACKEND", "mongo").lower() == "memory":
        return InMemoryInventoryRepo()
    return MongoInventoryRepo(
        uri=os.getenv("MONGO_URI", "mongodb://localhost:27017"),
        db_name=os.getenv("MONGO_DB", "medassist"),
        coll_name=os.getenv("MONGO_COLL", "medicines"),
    )

def get_inventory() -> InventoryPort:
    return _inventory()

@lru_cache
def _suggester() -> OpenAISuggester:
    return OpenAISuggester(
        api_key=os.getenv("SUGGESTER_API_KEY") or os.getenv("GOOGLE_API_KEY"),
        base_url=os.getenv("SUGGESTER_BASE_URL", DEFAULT_BASE_URL),
        default_model=os.getenv("SUGGESTER_DEFAULT_MODEL", DEFAULT_MODEL),
        allowed_models=_csv_env("SUGGESTER_ALLOWED_MODELS", DEFAULT_ALLOWED_MODELS),
        fallback=_csv_env("SUGGESTER_FALLBACK", DEFAULT_FALLBACK),
    )

@lru_cache
def _matcher() -> FuzzyMatcher:
    return FuzzyMatcher(threshold=float(os.getenv("FUZZY_THRESHOLD", "0.3")))

def resolve_timeout() -> float:
    return float(os.getenv("RESOLVE_TIMEOUT_SECONDS", "30"))

def get_resolve_uc() -> ResolveAvailabilityUseCase:
    return ResolveAvailabilityUseCase(
        inventory=_inventory(),
        suggester=_suggester(),
        matcher=_matcher(),
    )

def get_add_medication_uc() -> AddMedicationUseCase:
    return AddMedicationUseCase(inventory=_inventory())
