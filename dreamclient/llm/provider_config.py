"""Provider/runtime configuration for the dreamclient layers.

Architectural role:
    Centralizes endpoint selection, known model identifiers, generation
    defaults and credential lookup for `dreamclient.llm`, `dreamclient.image`
    and `dreamclient.core.engine`.

Model family detection:
    `CHAT_MODELS` and `LEGACY_COMPLETION_MODELS` form an allow-list of known
    identifiers. Unknown identifiers fall back to the naming convention where
    chat models start with `CHAT_MODEL_PREFIX` ("g"). The convention is brittle
    and kept only so existing deployments see unchanged request shapes.

Determinism:
    Deterministic for a fixed process environment and key files. Values are
    resolved at import time (plus runtime key-file reads in `load_key`).

Failure behavior:
    Missing key material is represented as `None` and handled by callers.
"""

import os
from dotenv import load_dotenv

load_dotenv()

# Remote endpoints (OpenAI-compatible).
BASE_URL = os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1").rstrip("/")
COMPLETIONS_URL = f"{BASE_URL}/chat/completions"
IMAGES_URL = f"{BASE_URL}/images/generations"

DEFAULT_KEY_FILE = "config/openai.key"

# Model used by the CLI when none is passed explicitly.
MODEL_NAME = os.getenv("DREAMCLIENT_MODEL", "gpt-3.5-turbo")

# Unset means the transport waits until the remote side resolves or errors.
_timeout_raw = os.getenv("DREAMCLIENT_TIMEOUT_SECONDS", "").strip()
REQUEST_TIMEOUT = float(_timeout_raw) if _timeout_raw else None

# Common model identifiers.
GPT4 = "gpt-4"
GPT35 = "gpt-3.5-turbo"
DAVINCI_003 = "text-davinci-003"
DAVINCI_002 = "text-davinci-002"
DAVINCI_001 = "text-davinci-001"
CURIE_001 = "text-curie-001"
BABBAGE_001 = "text-babbage-001"
ADA_001 = "text-ada-001"

CHAT_MODELS = frozenset({GPT4, GPT35})

LEGACY_COMPLETION_MODELS = frozenset({
    DAVINCI_003,
    DAVINCI_002,
    DAVINCI_001,
    CURIE_001,
    BABBAGE_001,
    ADA_001,
})

CHAT_MODEL_PREFIX = "g"

# Output ceilings per model family.
CHAT_MAX_TOKENS = 4096
LEGACY_MAX_TOKENS = 512

# Sampling defaults applied to legacy completion models when a value is unset.
TUNING_DEFAULTS = {
    "temperature": 0.7,
    "top_p": 1,
    "frequency_penalty": 0,
    "presence_penalty": 0,
}

# Roles accepted for the prompt turn. "assistant" keeps the historical wire shape.
PROMPT_ROLES = ("assistant", "user")
DEFAULT_PROMPT_ROLE = "assistant"

# Image generation limits.
MAX_IMAGES = 10
MAX_PROMPT_CHARS = 400
TRUNCATED_PROMPT_CHARS = 399


def load_key(path=DEFAULT_KEY_FILE):
    """Load API key from environment override or key file.

    Resolution order:
        1. Environment variable inferred from file stem (for example
           `config/openai.key` -> `OPENAI_API_KEY`).
        2. Raw file contents at `path`.

    Args:
        path: Key file path or `None`.

    Returns:
        Key string or `None` when not available.

    Edge cases:
        - `None` path returns `None`.
        - Missing or empty file returns `None`.
    """
    if not path:
        return None
    key_name = os.path.splitext(os.path.basename(path))[0].upper() + "_API_KEY"
    env_value = os.getenv(key_name)
    if env_value:
        return env_value.strip()
    if not os.path.exists(path):
        return None
    with open(path, "r") as f:
        return f.read().strip() or None
