"""dreamclient: minimal client for OpenAI-compatible completion and image APIs.

Package split:
    - `core`: client engine and shared data contracts.
    - `llm`: configuration, transport and completion payload handling.
    - `image`: image payload construction and URL extraction.
    - `api`: command-line adapter.
"""

from dreamclient.core.engine import DreamClient
from dreamclient.core.types import ErrorKind, ModelFamily, RequestError, Result, TuningOptions

__all__ = [
    "DreamClient",
    "ErrorKind",
    "ModelFamily",
    "RequestError",
    "Result",
    "TuningOptions",
]
