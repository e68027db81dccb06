from __future__ import annotations

import os
from dataclasses import dataclass

try:
    from dotenv import load_dotenv
except ImportError:  # pragma: no cover - optional in minimal setups
    load_dotenv = None

if load_dotenv is not None:
    load_dotenv()


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes"}


def _env_optional_int(name: str) -> int | None:
    raw = os.getenv(name, "").strip()
    if not raw:
        return None
    try:
        value = int(raw)
    except ValueError:
        return None
    return value if value > 0 else None


@dataclass(frozen=True)
class Settings:
    max_documents: int = int(os.getenv("OMNIRAG_MAX_DOCUMENTS", "5"))
    seed_samples_raw: str = os.getenv("OMNIRAG_SEED_SAMPLES", "true")
    default_system_instruction: str = os.getenv(
        "OMNIRAG_SYSTEM_INSTRUCTION", "You are an expert Knowledge Assistant."
    )
    llm_provider: str = os.getenv("OMNIRAG_LLM_PROVIDER", "gemini")
    llm_temperature: float = float(os.getenv("OMNIRAG_LLM_TEMPERATURE", "0.3"))
    llm_max_tokens: int | None = _env_optional_int("OMNIRAG_LLM_MAX_TOKENS")
    llm_timeout: float = float(os.getenv("OMNIRAG_LLM_TIMEOUT", "60"))
    gemini_api_key: str | None = os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY")
    gemini_chat_model: str = os.getenv("GEMINI_CHAT_MODEL", "gemini-2.5-flash")
    openai_api_key: str | None = os.getenv("OPENAI_API_KEY")
    openai_base_url: str = os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1")
    openai_chat_model: str | None = os.getenv("OPENAI_CHAT_MODEL")
    ollama_base_url: str = os.getenv("OLLAMA_BASE_URL", "http://localhost:11434")
    ollama_model: str = os.getenv("OLLAMA_MODEL", "llama3.2:3b")
    file_max_bytes: int = int(os.getenv("OMNIRAG_FILE_MAX_BYTES", "20971520"))
    metrics_enabled: bool = _env_bool("OMNIRAG_METRICS_ENABLED", "true")
    log_level: str = os.getenv("OMNIRAG_LOG_LEVEL", "INFO")

    @property
    def seed_samples(self) -> bool:
        raw = os.getenv("OMNIRAG_SEED_SAMPLES", self.seed_samples_raw)
        return raw.strip().lower() in {"1", "true", "yes"}

    @property
    def provider(self) -> str:
        return os.getenv("OMNIRAG_LLM_PROVIDER", self.llm_provider).strip().lower()


settings = Settings()
