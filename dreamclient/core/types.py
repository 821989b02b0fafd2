"""Data contracts shared by the client engine and its request layers.

Architectural role:
    Defines the immutable configuration the client is built from and the
    result envelope every public operation returns.

Determinism:
    All types are plain frozen data classes or enums. `TuningOptions.resolved`
    is a pure function of the stored values and `TUNING_DEFAULTS`.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping

from dreamclient.llm.provider_config import (
    CHAT_MODEL_PREFIX,
    CHAT_MODELS,
    DEFAULT_PROMPT_ROLE,
    LEGACY_COMPLETION_MODELS,
    TUNING_DEFAULTS,
)


class ModelFamily(str, Enum):
    """Request shape family a model identifier belongs to."""

    CHAT = "chat"
    LEGACY_COMPLETION = "legacy_completion"

    @classmethod
    def detect(cls, model: str, override: "ModelFamily | str | None" = None) -> "ModelFamily":
        """Resolve the family for `model`.

        Resolution order:
            1. Explicit `override` (accepts a member or its value).
            2. Allow-listed known identifiers.
            3. First-character naming convention (`CHAT_MODEL_PREFIX`).
        """
        if override is not None:
            return cls(override)
        if model in CHAT_MODELS:
            return cls.CHAT
        if model in LEGACY_COMPLETION_MODELS:
            return cls.LEGACY_COMPLETION
        if model.startswith(CHAT_MODEL_PREFIX):
            return cls.CHAT
        return cls.LEGACY_COMPLETION


@dataclass(frozen=True)
class TuningOptions:
    """Sampling controls for legacy completion models.

    `None` marks a value the caller did not supply. Missing keys and explicit
    `None` values are treated the same way by `resolved`.
    """

    temperature: float | None = None
    top_p: float | None = None
    frequency_penalty: float | None = None
    presence_penalty: float | None = None

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any] | None) -> "TuningOptions":
        """Build options from a caller mapping, ignoring unrecognized keys."""
        options = options or {}
        return cls(**{name: options.get(name) for name in TUNING_DEFAULTS})

    def resolved(self) -> dict[str, float]:
        """Return all four values with defaults substituted for unset ones."""
        values = {}
        for name, default in TUNING_DEFAULTS.items():
            value = getattr(self, name)
            values[name] = default if value is None else value
        return values


@dataclass(frozen=True)
class ClientSettings:
    """Immutable client configuration captured at construction time.

    Attributes:
        api_key: Opaque bearer token forwarded in the `Authorization` header.
        model: Remote model identifier.
        family: Resolved request shape family.
        tuning: Sampling options; always `None` for chat-family models.
        prompt_role: Role assigned to the prompt turn.
        timeout: Transport timeout in seconds, `None` waits indefinitely.
        completions_url: Chat-completions endpoint.
        images_url: Image-generation endpoint.
    """

    api_key: str
    model: str
    family: ModelFamily
    tuning: TuningOptions | None
    completions_url: str
    images_url: str
    prompt_role: str = DEFAULT_PROMPT_ROLE
    timeout: float | None = None

    @property
    def is_chat_model(self) -> bool:
        return self.family is ModelFamily.CHAT

    def __repr__(self) -> str:
        return (
            f"ClientSettings(model={self.model!r}, family={self.family.value!r}, "
            f"tuning={self.tuning!r}, prompt_role={self.prompt_role!r})"
        )


class ErrorKind(str, Enum):
    """Failure categories surfaced through `Result.error`."""

    NETWORK = "network"
    DECODE = "decode"
    REMOTE_STATUS = "remote_status"
    RESPONSE_SHAPE = "response_shape"
    VALIDATION = "validation"


@dataclass(frozen=True)
class RequestError:
    """Sanitized failure description. Never contains credentials."""

    kind: ErrorKind
    message: str
    status_code: int | None = None


@dataclass(frozen=True)
class Result:
    """Success/failure envelope returned by every client operation."""

    value: Any = None
    error: RequestError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: Any) -> "Result":
        return cls(value=value)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str, status_code: int | None = None) -> "Result":
        return cls(error=RequestError(kind=kind, message=message, status_code=status_code))
