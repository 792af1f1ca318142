# medassist/infra/llm/openai_suggester.py
from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from openai import AsyncOpenAI, OpenAIError, RateLimitError

from medassist.domain.errors import InputError, SuggestionServiceError
from medassist.domain.ports import Suggestion, SuggesterPort

logger = logging.getLogger("medassist.suggester")

# Gemini exposes an OpenAI-compatible endpoint; any compatible base URL works.
DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai/"
DEFAULT_MODEL = "gemini-1.5-flash"
DEFAULT_ALLOWED_MODELS = (
    "gemini-2.5-flash-lite-preview-06-17",
    "gemini-1.5-pro",
    "gemini-1.5-flash",
)
DEFAULT_FALLBACK = ("Paracetamol", "Ibuprofen", "Diclofenac")
MAX_SUGGESTIONS = 3

PROMPT_TEMPLATE = (
    'List up to 3 common therapeutic or generic alternatives for "{name}". '
    'Only provide names separated by commas. If none, say "None".'
)


def parse_suggestions(raw: Optional[str], limit: int = MAX_SUGGESTIONS) -> List[str]:
    """'A, B,, C' → ['A', 'B', 'C']; 'None' (any case) → []."""
    text = (raw or "").strip()
    if not text or text.lower() == "none":
        return []
    names = [p.strip() for p in text.split(",")]
    return [n for n in names if n][:limit]


class OpenAISuggester(SuggesterPort):
    def __init__(
        self,
        *,
        api_key: str | None,
        base_url: str | None = DEFAULT_BASE_URL,
        default_model: str = DEFAULT_MODEL,
        allowed_models: Sequence[str] = DEFAULT_ALLOWED_MODELS,
        fallback: Sequence[str] = DEFAULT_FALLBACK,
        temperature: float = 0.2,
        max_tokens: int = 80,
        client: AsyncOpenAI | None = None,
    ):
        self.api_key = api_key or ""
        self.base_url = base_url or None
        self.default_model = default_model
        self.allowed_models = tuple(allowed_models)
        self.fallback = tuple(n for n in fallback if n)
        self.temperature = temperature
        self.max_tokens = max_tokens
        self._client = client

    @property
    def configured(self) -> bool:
        return self._client is not None or bool(self.api_key)

    def _ensure_client(self) -> AsyncOpenAI:
        if self._client is None:
            if not self.api_key:
                raise SuggestionServiceError("Suggestion service API key is not configured.")
            kwargs = {"api_key": self.api_key}
            if self.base_url:
                kwargs["base_url"] = self.base_url
            self._client = AsyncOpenAI(**kwargs)
        return self._client

    def resolve_model(self, model: Optional[str]) -> str:
        chosen = (model or "").strip() or self.default_model
        if chosen not in self.allowed_models:
            raise InputError(
                f"Invalid model '{chosen}'. Allowed: {', '.join(self.allowed_models)}"
            )
        return chosen

    async def suggest(self, name: str, model: Optional[str] = None) -> Suggestion:
        chosen = self.resolve_model(model)
        client = self._ensure_client()
        try:
            rsp = await client.chat.completions.create(
                model=chosen,
                messages=[{"role": "user", "content": PROMPT_TEMPLATE.format(name=name)}],
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
        except RateLimitError as e:
            if not self.fallback:
                raise SuggestionServiceError(f"Rate limited by suggestion service: {e}", model=chosen) from e
            logger.warning(
                "[suggest] DEGRADED q=%s model=%s rate limited, using fallback=%s",
                name, chosen, list(self.fallback),
            )
            return Suggestion(names=self.fallback[:MAX_SUGGESTIONS], model=chosen, degraded=True)
        except OpenAIError as e:
            logger.error("[suggest] q=%s model=%s failed: %s", name, chosen, e)
            raise SuggestionServiceError(str(e), model=chosen) from e

        raw = (rsp.choices[0].message.content or "").strip() if rsp.choices else ""
        logger.info("[suggest] q=%s model=%s raw=%r", name, chosen, raw)
        return Suggestion(names=tuple(parse_suggestions(raw)), model=chosen)
