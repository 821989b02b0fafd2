"""LLM access package.

Architectural role:
    Provides endpoint configuration, the HTTP transport primitive and
    chat-completion payload construction used by `dreamclient.core.engine`.

Module split:
    - `provider_config`: environment-driven endpoints, model registry and defaults.
    - `service`: completion payload construction and response extraction.
    - `client`: HTTP transport and failure classification.
"""
