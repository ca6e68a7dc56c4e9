"""
Configuration

Read once at process start from the environment. Required API keys are
kept optional here; the adapter that needs one raises MissingConfiguration
when it is called without it.
"""
import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

DEFAULT_PORT = 3000
DEFAULT_USER_AGENT = "structured-note-analyzer/1.0 (contact: your-email@example.com)"
DEFAULT_MODEL = "gpt-4o"
DEFAULT_PREVIEW_CHARS = 4000
DEFAULT_EXTRACT_MAX_CHARS = 20000
DEFAULT_HTTP_TIMEOUT = 30.0
DEFAULT_LLM_TIMEOUT = 120.0

LOCATOR_BACKENDS = ("sec-api", "edgar")

# CUSIP issuer prefix (first 6 characters) -> issuer CIK
DEFAULT_ISSUER_MAP = {
    "48136H": "19617",  # JPMorgan Chase Financial Company LLC
    "48134K": "19617",
    "46647P": "19617",
}


@dataclass(frozen=True)
class Settings:
    sec_api_key: Optional[str] = None
    openai_api_key: Optional[str] = None
    openai_model: str = DEFAULT_MODEL
    user_agent: str = DEFAULT_USER_AGENT
    locator_backend: str = "sec-api"
    issuer_map: Mapping[str, str] = field(default_factory=lambda: dict(DEFAULT_ISSUER_MAP))
    preview_chars: int = DEFAULT_PREVIEW_CHARS
    extract_max_chars: int = DEFAULT_EXTRACT_MAX_CHARS
    http_timeout: float = DEFAULT_HTTP_TIMEOUT
    llm_timeout: float = DEFAULT_LLM_TIMEOUT
    port: int = DEFAULT_PORT
    log_level: str = "INFO"


def _get_int(env: Mapping[str, str], name: str, default: int, minimum: int = 1) -> int:
    value = env.get(name, str(default))
    try:
        number = int(value)
    except ValueError:
        number = None
    if number is None or number < minimum:
        msg = f"Invalid {name} value: {value}"
        raise ValueError(msg)
    return number


def _get_float(env: Mapping[str, str], name: str, default: float) -> float:
    value = env.get(name, str(default))
    try:
        return float(value)
    except ValueError:
        msg = f"Invalid {name} value: {value}"
        raise ValueError(msg) from None


def load_issuer_map(path: Optional[str]) -> dict[str, str]:
    """Load a CUSIP prefix -> CIK mapping from a JSON file, or the built-in one"""
    if not path:
        return dict(DEFAULT_ISSUER_MAP)

    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"Issuer map in {path} must be a JSON object")
    return {str(prefix).upper(): str(cik) for prefix, cik in data.items()}


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from environment variables"""
    env = os.environ if env is None else env

    backend = env.get("LOCATOR_BACKEND", "sec-api").lower()
    if backend not in LOCATOR_BACKENDS:
        raise ValueError(f"Invalid LOCATOR_BACKEND value: {backend}")

    return Settings(
        sec_api_key=env.get("SEC_API_KEY") or None,
        openai_api_key=env.get("OPENAI_API_KEY") or None,
        openai_model=env.get("OPENAI_MODEL", DEFAULT_MODEL),
        user_agent=env.get("SEC_USER_AGENT") or DEFAULT_USER_AGENT,
        locator_backend=backend,
        issuer_map=load_issuer_map(env.get("ISSUER_MAP_FILE")),
        preview_chars=_get_int(env, "HTML_PREVIEW_CHARS", DEFAULT_PREVIEW_CHARS),
        extract_max_chars=_get_int(env, "EXTRACT_MAX_CHARS", DEFAULT_EXTRACT_MAX_CHARS),
        http_timeout=_get_float(env, "HTTP_TIMEOUT", DEFAULT_HTTP_TIMEOUT),
        llm_timeout=_get_float(env, "LLM_TIMEOUT", DEFAULT_LLM_TIMEOUT),
        port=_get_int(env, "PORT", DEFAULT_PORT),
        log_level=env.get("LOG_LEVEL", "INFO").upper(),
    )
