"""
Environment-driven settings for SmartQR.

Values are read at call time so tests (and long-running callers) can
change them with the environment:

- SMARTQR_RENDER_ENDPOINT: base URL of the QR rendering service.
- SMARTQR_RENDER_SIZE: edge length in pixels of rendered codes.
"""

from __future__ import annotations

import os


DEFAULT_RENDER_ENDPOINT = "https://api.qrserver.com/v1/create-qr-code/"
DEFAULT_RENDER_SIZE = 400

ENV_RENDER_ENDPOINT = "SMARTQR_RENDER_ENDPOINT"
ENV_RENDER_SIZE = "SMARTQR_RENDER_SIZE"


def render_endpoint() -> str:
    raw = os.getenv(ENV_RENDER_ENDPOINT)
    if raw is None:
        return DEFAULT_RENDER_ENDPOINT
    s = raw.strip()
    return s or DEFAULT_RENDER_ENDPOINT


def render_size() -> int:
    """
    Rendered code size from SMARTQR_RENDER_SIZE.

    Blank or non-positive values fall back to the default. A value that is
    not an integer raises ValueError (misconfiguration should be loud).
    """
    raw = os.getenv(ENV_RENDER_SIZE)
    if raw is None or not raw.strip():
        return DEFAULT_RENDER_SIZE
    try:
        size = int(raw.strip())
    except ValueError as exc:
        raise ValueError(f"{ENV_RENDER_SIZE} must be an integer, got {raw!r}") from exc
    return size if size > 0 else DEFAULT_RENDER_SIZE
