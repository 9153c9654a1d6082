"""
Configuration constants for the AI Engine SDK.
"""

import os
from dataclasses import dataclass

DEFAULT_API_BASE_URL = "https://agentverse.ai"

# Environment variable names
API_KEY_ENV_VAR = "AV_API_KEY"
BASE_URL_ENV_VAR = "AI_ENGINE_BASE_URL"
TIMEOUT_ENV_VAR = "AI_ENGINE_TIMEOUT_SECONDS"

DEFAULT_TIMEOUT_SECONDS = 30.0

# Endpoint paths (relative to the API base URL)
API_VERSION_PREFIX = "/v1beta1"
SESSIONS_PATH = f"{API_VERSION_PREFIX}/engine/chat/sessions"
PUBLIC_FUNCTION_GROUPS_PATH = f"{API_VERSION_PREFIX}/function-groups/public/"
PRIVATE_FUNCTION_GROUPS_PATH = f"{API_VERSION_PREFIX}/function-groups/"
CREDIT_INFO_PATH = f"{API_VERSION_PREFIX}/engine/credit/info"
REMAINING_TOKENS_PATH = f"{API_VERSION_PREFIX}/engine/credit/remaining_tokens"

# Known engine models, keyed by API identifier
AVAILABLE_MODELS = {
    "thoughtful-01":     "Thoughtful",
    "talkative-01":      "Talkative",
    "talkative-02":      "Talkative 2",
    "talkative-03":      "Talkative 3",
    "creative-01":       "Creative",
    "creative-02":       "Creative 2",
    "creative-03":       "Creative 3",
    "creative-04":       "Creative 4",
    "gemini-pro":        "Gemini Pro",
    "next-gen":          "Next Generation",
    "ml-recommender-01": "ML Recommender",
}

# Models reported by AiEngine.get_models()
DEFAULT_MODEL_IDS = [
    "thoughtful-01",
    "talkative-01",
    "creative-01",
    "gemini-pro",
    "next-gen",
    "ml-recommender-01",
]

DEFAULT_MODEL = "talkative-01"

# Reply text that accepts a pending confirmation
CONFIRMATION_TOKEN = "confirm"


@dataclass(frozen=True)
class CustomModel:
    """A model not in ``AVAILABLE_MODELS`` (e.g. a private deployment)."""
    id: str
    name: str


def get_model_id(model: "str | CustomModel") -> str:
    """Return the API identifier for a model id string or ``CustomModel``."""
    return model if isinstance(model, str) else model.id


def get_model_name(model: "str | CustomModel") -> str:
    """Return a display name; unknown id strings are their own name."""
    if isinstance(model, CustomModel):
        return model.name
    return AVAILABLE_MODELS.get(model, model)


def resolve_api_key(explicit_key: str | None = None) -> str:
    """Get the AI Engine API key.

    Priority:
        1. ``explicit_key`` if provided (e.g. from CLI ``--api-key``).
        2. The ``AV_API_KEY`` environment variable.

    Raises ValueError if no key is found.
    """
    if explicit_key:
        return explicit_key

    key = os.environ.get(API_KEY_ENV_VAR, "").strip()
    if key:
        return key

    raise ValueError(
        f"No AI Engine API key. Pass --api-key or set the {API_KEY_ENV_VAR} environment variable."
    )


def resolve_base_url(explicit_url: str | None = None) -> str:
    """Return the API base URL without a trailing slash."""
    url = explicit_url or os.environ.get(BASE_URL_ENV_VAR, "").strip() or DEFAULT_API_BASE_URL
    return url.rstrip("/")


def resolve_timeout_seconds() -> float:
    raw = os.environ.get(TIMEOUT_ENV_VAR, "").strip()
    if not raw:
        return DEFAULT_TIMEOUT_SECONDS
    try:
        value = float(raw)
    except ValueError:
        return DEFAULT_TIMEOUT_SECONDS
    return value if value > 0 else DEFAULT_TIMEOUT_SECONDS
