"""
LLM Service — unified interface to all providers via LiteLLM.

Responsibilities:
  • Resolve a provider + model key to a LiteLLM model id
  • Apply per-prompt temperature / token defaults
  • Send chat completions (plain text or JSON)
  • Validate API keys by making a tiny completion call
"""

from __future__ import annotations

import logging
from typing import Any

import litellm
from litellm import acompletion

from applykit.config import MODELS, PROMPT_CONFIG, settings
from applykit.utils.json_response import LLMResponseError, parse_json_response

logger = logging.getLogger(__name__)

# Silence verbose LiteLLM logs in dev
litellm.suppress_debug_info = True
litellm.set_verbose = False


# ── Helpers ──────────────────────────────────────────────────────────────────

# Maps our provider key → the env var name that LiteLLM expects
PROVIDER_KEY_ENV = {
    "openrouter": "OPENROUTER_API_KEY",
    "google": "GEMINI_API_KEY",
    "groq": "GROQ_API_KEY",
}

# System prompt for every JSON-producing call
JSON_SYSTEM_PROMPT = (
    "You are a strict JSON generator. Respond with ONLY valid JSON. "
    "No markdown, no commentary."
)

# Tiny prompt used for key validation (cheap, fast)
_VALIDATION_PROMPT = "Respond with exactly: OK"


def resolve_model_id(provider: str, model_key: str) -> str:
    """Look up the LiteLLM model_id from our registry."""
    provider_models = MODELS.get(provider)
    if not provider_models:
        raise ValueError(f"Unknown provider: {provider}")
    model_entry = provider_models.get(model_key)
    if not model_entry:
        raise ValueError(f"Unknown model: {model_key} for provider {provider}")
    return model_entry["model_id"]


def _provider_kwargs(provider: str, api_key: str) -> dict[str, Any]:
    """Keyword arguments LiteLLM needs for the provider (key, attribution headers)."""
    kwargs: dict[str, Any] = {"api_key": api_key}
    if provider == "openrouter":
        kwargs["extra_headers"] = {
            "HTTP-Referer": settings.openrouter_referer,
            "X-Title": settings.openrouter_title,
        }
    return kwargs


# ── Core Completion ──────────────────────────────────────────────────────────


async def complete(
    *,
    provider: str,
    model_key: str,
    api_key: str,
    messages: list[dict[str, str]],
    prompt_name: str | None = None,
    json_mode: bool = False,
) -> str:
    """
    Send a chat completion request via LiteLLM.

    Args:
        provider:    "openrouter" | "google" | "groq"
        model_key:   Key from MODELS registry (e.g. "gpt-4o-mini")
        api_key:     API key for the provider
        messages:    OpenAI-format message list
        prompt_name: Optional key into PROMPT_CONFIG for temp/tokens
        json_mode:   If True, request a JSON object response

    Returns:
        The assistant's response text. Raises LLMResponseError if it is empty.
    """
    model_id = resolve_model_id(provider, model_key)

    config = PROMPT_CONFIG.get(prompt_name, {}) if prompt_name else {}
    temp = config.get("temperature", 0.3)
    tokens = config.get("max_tokens", 1500)

    kwargs: dict[str, Any] = {
        "model": model_id,
        "messages": messages,
        "temperature": temp,
        "max_tokens": tokens,
        **_provider_kwargs(provider, api_key),
    }

    if json_mode:
        kwargs["response_format"] = {"type": "json_object"}

    logger.info(f"LLM call: prompt={prompt_name} model={model_id} temp={temp} tokens={tokens}")

    try:
        response = await acompletion(**kwargs)
    except Exception as e:
        logger.error(f"LLM error ({provider}/{model_key}): {e}")
        raise

    content = response.choices[0].message.content
    if not content or not content.strip():
        raise LLMResponseError(f"Empty response from {model_id}")

    logger.info(f"LLM response: {len(content)} chars, usage={response.usage}")
    return content


async def complete_json(
    *,
    provider: str,
    model_key: str,
    api_key: str,
    prompt: str,
    prompt_name: str | None = None,
    json_mode: bool = False,
) -> Any:
    """
    Send a single user prompt under the strict-JSON system prompt and parse the reply.

    Fenced ```json blocks are unwrapped; anything that still fails to parse
    raises LLMResponseError.
    """
    raw = await complete(
        provider=provider,
        model_key=model_key,
        api_key=api_key,
        messages=[
            {"role": "system", "content": JSON_SYSTEM_PROMPT},
            {"role": "user", "content": prompt},
        ],
        prompt_name=prompt_name,
        json_mode=json_mode,
    )
    return parse_json_response(raw)


async def complete_text(
    *,
    provider: str,
    model_key: str,
    api_key: str,
    prompt: str,
    prompt_name: str | None = None,
) -> str:
    """Send a single user prompt and return the reply text."""
    return await complete(
        provider=provider,
        model_key=model_key,
        api_key=api_key,
        messages=[{"role": "user", "content": prompt}],
        prompt_name=prompt_name,
    )


# ── Key Validation ───────────────────────────────────────────────────────────


async def validate_api_key(provider: str, api_key: str) -> dict[str, Any]:
    """
    Validate an API key by making a tiny completion call with the recommended model.

    Returns: {"valid": bool, "provider": str, "model_used": str, "error": str | None}
    """
    model_id = resolve_model_id(provider, _get_recommended_model(provider))

    try:
        response = await acompletion(
            model=model_id,
            messages=[{"role": "user", "content": _VALIDATION_PROMPT}],
            max_tokens=5,
            temperature=0,
            **_provider_kwargs(provider, api_key),
        )
        _ = response.choices[0].message.content
        return {
            "valid": True,
            "provider": provider,
            "model_used": model_id,
            "error": None,
        }
    except Exception as e:
        error_msg = classify_key_error(e)
        logger.warning(f"Key validation failed for {provider}: {error_msg}")
        return {
            "valid": False,
            "provider": provider,
            "model_used": model_id,
            "error": error_msg,
        }


def classify_key_error(error: Exception) -> str:
    """Map a provider exception to a short user-facing message."""
    raw_error = str(error).lower()
    if "401" in raw_error or "invalid_api_key" in raw_error or "invalid api key" in raw_error or "authentication" in raw_error:
        return "Invalid API key"
    if "429" in raw_error or "rate_limit" in raw_error or "rate limit" in raw_error or "too many requests" in raw_error:
        return "Rate limited — key is valid but you've hit the provider limit. Try again later."
    if "404" in raw_error or "model_not_found" in raw_error or "model not found" in raw_error or "does not exist" in raw_error:
        return "Model not available — try a different model."
    return str(error)


def _get_recommended_model(provider: str) -> str:
    """Return the recommended model key for a provider (first model if none is flagged)."""
    provider_models = MODELS.get(provider)
    if not provider_models:
        raise ValueError(f"Unknown provider: {provider}")
    for key, info in provider_models.items():
        if info.get("recommended", False):
            return key
    return next(iter(provider_models))


# ── Provider Info ────────────────────────────────────────────────────────────


def get_providers_info() -> list[dict[str, Any]]:
    """
    Return a list of provider info dicts for the frontend.
    No secrets are exposed — just provider names, model names, and metadata.
    """
    providers = []
    for provider_key, models in MODELS.items():
        model_list = []
        for model_key, model_info in models.items():
            model_list.append({
                "key": model_key,
                "name": model_info["name"],
                "model_id": model_info["model_id"],
                "description": model_info["description"],
                "recommended": model_info.get("recommended", False),
            })
        providers.append({
            "id": provider_key,
            "name": _provider_display_name(provider_key),
            "models": model_list,
            "key_env_var": PROVIDER_KEY_ENV.get(provider_key, ""),
            "server_key_configured": server_api_key(provider_key) is not None,
        })
    return providers


def server_api_key(provider: str) -> str | None:
    """The server-side default key for a provider, if one is configured."""
    return {
        "openrouter": settings.openrouter_api_key,
        "google": settings.gemini_api_key,
        "groq": settings.groq_api_key,
    }.get(provider)


def _provider_display_name(provider: str) -> str:
    return {
        "openrouter": "OpenRouter",
        "google": "Google AI Studio",
        "groq": "Groq",
    }.get(provider, provider.title())
