"""Interface adapters.

Adapters:
    - `cli`: command-line access to completions and image generation.
"""
