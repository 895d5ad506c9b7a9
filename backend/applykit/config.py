from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # App
    app_name: str = "ApplyKit"
    debug: bool = True
    log_level: str = "INFO"

    # Routes are mounted under this prefix ("" serves /upload-cv, "/api" serves /api/upload-cv)
    api_prefix: str = ""

    # CORS
    frontend_url: str = "http://localhost:3000"

    # Uploads
    max_upload_mb: int = 10

    # Default model when the request carries no X-LLM-Provider / X-LLM-Model headers
    default_provider: str = "openrouter"
    default_model_key: str = "gpt-4o-mini"

    # LLM API Keys (a per-request header key takes precedence over these server defaults)
    openrouter_api_key: Optional[str] = None
    gemini_api_key: Optional[str] = None
    groq_api_key: Optional[str] = None

    # OpenRouter attribution headers
    openrouter_referer: str = "http://localhost:3000"
    openrouter_title: str = "ApplyKit"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    @property
    def max_upload_bytes(self) -> int:
        return self.max_upload_mb * 1024 * 1024


settings = Settings()


# ── Model Registry ──────────────────────────────────────────────────────────

MODELS = {
    "openrouter": {
        "gpt-4o-mini": {
            "name": "GPT-4o mini",
            "model_id": "openrouter/openai/gpt-4o-mini",
            "description": "Fast, cheap, dependable JSON output",
            "recommended": True,
        },
        "deepseek-chat": {
            "name": "DeepSeek V3",
            "model_id": "openrouter/deepseek/deepseek-chat",
            "description": "Long-form writing for cover letters",
            "recommended": False,
        },
    },
    "google": {
        "gemini-2.0-flash": {
            "name": "Gemini 2.0 Flash",
            "model_id": "gemini/gemini-2.0-flash",
            "description": "Most reliable structured output",
            "recommended": True,
        },
    },
    "groq": {
        "llama-3.3-70b": {
            "name": "LLaMA 3.3 70B",
            "model_id": "groq/llama-3.3-70b-versatile",
            "description": "Best all-rounder for application writing",
            "recommended": True,
        },
    },
}

# ── Prompt Configuration ────────────────────────────────────────────────────

PROMPT_CONFIG = {
    "cv_analysis": {"temperature": 0.0, "max_tokens": 2000},
    "job_search": {"temperature": 0.0, "max_tokens": 3000},
    "tailored_cv": {"temperature": 0.3, "max_tokens": 2000},
    "cover_letter": {"temperature": 0.3, "max_tokens": 800},
    "application_email": {"temperature": 0.3, "max_tokens": 400},
}
