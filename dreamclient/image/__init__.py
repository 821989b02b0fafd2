"""Image generation adapter package.

Scope:
    Builds image-generation payloads (prompt truncation, size string) and
    extracts generated URLs. Transport is shared with `dreamclient.llm.client`.

Non-goals:
    - No image download, decoding or storage.
    - No polling of asynchronous generation jobs.
"""
