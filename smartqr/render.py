"""
Collaborator interfaces for SmartQR.

The codec never draws or reads pixels itself. It talks to:
- a Renderer: canonical text + size -> image locator (e.g. a URL)
- an ImageDecoder: image -> decoded text, or None when no code was found

QRServerRenderer builds a locator for the public api.qrserver.com service.
It does no I/O; fetching the image is up to the caller.
"""

from __future__ import annotations

from typing import Any, Optional, Protocol
from urllib.parse import quote

from . import config


class Renderer(Protocol):
    def render(self, text: str, size: int) -> str:
        ...


class ImageDecoder(Protocol):
    def decode(self, image: Any) -> Optional[str]:
        ...


class QRServerRenderer:
    def __init__(self, endpoint: Optional[str] = None, margin: int = 10) -> None:
        self.endpoint = endpoint or config.render_endpoint()
        self.margin = margin

    def render(self, text: str, size: int) -> str:
        data = quote(text, safe="-_.!~*'()")
        sep = "&" if "?" in self.endpoint else "?"
        return f"{self.endpoint}{sep}size={size}x{size}&data={data}&format=png&margin={self.margin}"
