"""
Request-scoped helpers — extract API keys and the active model from headers.
"""

from __future__ import annotations

from dataclasses import dataclass

from fastapi import Depends, Header, HTTPException
from typing import Optional

from applykit.config import MODELS, settings
from applykit.services.llm_service import server_api_key


class APIKeys:
    """Container for per-request API keys extracted from headers."""

    def __init__(
        self,
        openrouter: str | None = None,
        google: str | None = None,
        groq: str | None = None,
    ):
        self.openrouter = openrouter
        self.google = google
        self.groq = groq

    def get_key(self, provider: str) -> str | None:
        """Get the header key for a provider, falling back to the server-side key."""
        return getattr(self, provider, None) or server_api_key(provider)


@dataclass(frozen=True)
class LLMSelection:
    """Provider, model and key to use for every LLM call in one request."""

    provider: str
    model_key: str
    api_key: str


async def get_api_keys(
    x_openrouter_key: Optional[str] = Header(None, alias="X-OpenRouter-Key"),
    x_google_key: Optional[str] = Header(None, alias="X-Google-Key"),
    x_groq_key: Optional[str] = Header(None, alias="X-Groq-Key"),
) -> APIKeys:
    """FastAPI dependency that extracts API keys from request headers."""
    return APIKeys(
        openrouter=x_openrouter_key or None,
        google=x_google_key or None,
        groq=x_groq_key or None,
    )


async def get_llm_selection(
    provider: Optional[str] = Header(None, alias="X-LLM-Provider"),
    model_key: Optional[str] = Header(None, alias="X-LLM-Model"),
    api_keys: APIKeys = Depends(get_api_keys),
) -> LLMSelection:
    """FastAPI dependency resolving the model for this request, or 400."""
    provider = provider or settings.default_provider
    if provider not in MODELS:
        raise HTTPException(status_code=400, detail=f"Unknown LLM provider '{provider}'")

    if model_key is None:
        model_key = settings.default_model_key if provider == settings.default_provider else next(iter(MODELS[provider]))
    if model_key not in MODELS[provider]:
        raise HTTPException(
            status_code=400,
            detail=f"Unknown model '{model_key}' for provider '{provider}'",
        )

    key = api_keys.get_key(provider)
    if not key:
        raise HTTPException(
            status_code=400,
            detail=f"Missing API key for provider '{provider}'. Set it in Settings.",
        )
    return LLMSelection(provider=provider, model_key=model_key, api_key=key)
