"""Core client package.

Composition:
    - `engine`: `DreamClient`, the request dispatch component.
    - `types`: immutable settings, tuning options and result contracts.

Determinism and side effects:
    Package import itself is side-effect free apart from configuration loading
    in `dreamclient.llm.provider_config`.
"""
