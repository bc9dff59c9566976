"""
Text primitives shared by the payload builders.
"""

from __future__ import annotations

import re
from typing import Optional
from urllib.parse import SplitResult, urlsplit, urlunsplit


_SCHEME_RE = re.compile(r"^[a-z][a-z0-9+.\-]*://", re.IGNORECASE)
_NON_DIGIT_RE = re.compile(r"[^0-9]")
# C0 controls and space, trimmed from both ends of a scanned URL
_OUTER_JUNK = "".join(chr(i) for i in range(33))


def escape_list_separator(s: Optional[str]) -> str:
    """
    Escape a value for a semicolon-delimited grammar (WiFi QR).

    Backslashes are escaped before semicolons, otherwise the backslashes
    inserted for semicolons would be doubled.
    """
    if not s:
        return ""
    return s.replace("\\", "\\\\").replace(";", "\\;")


def escape_newlines(s: Optional[str]) -> str:
    """Replace literal newlines with the two characters '\\n'."""
    if not s:
        return ""
    return s.replace("\n", "\\n")


def normalize_phone(phone: Optional[str]) -> Optional[str]:
    """
    Keep a single leading '+' (if present) and every digit, drop the rest.

    Falsy input is returned unchanged.
    """
    if not phone:
        return phone
    plus = "+" if phone.strip().startswith("+") else ""
    return plus + _NON_DIGIT_RE.sub("", phone)


def parse_absolute_url(text: str) -> Optional[SplitResult]:
    """
    Parse `text` as an absolute hierarchical URL (scheme + network location).

    Returns None when it is not one. Opaque forms such as mailto: or tel:
    do not count. Surrounding whitespace (a trailing newline from a scanner,
    say) is ignored; whitespace inside the URL is not.
    """
    if not text:
        return None
    text = text.strip(_OUTER_JUNK)
    if not text or any(c.isspace() for c in text):
        return None
    try:
        parts = urlsplit(text)
        _ = parts.port  # raises ValueError on a malformed port
    except ValueError:
        return None
    if not parts.scheme or not parts.netloc or not parts.hostname:
        return None
    return parts


def canonical_url(parts: SplitResult) -> str:
    # scheme and host are case-insensitive; userinfo is kept as written
    userinfo, at, hostport = parts.netloc.rpartition("@")
    netloc = userinfo + at + hostport.lower()
    path = parts.path or "/"
    return urlunsplit((parts.scheme.lower(), netloc, path, parts.query, parts.fragment))


def has_scheme(value: str) -> bool:
    return bool(_SCHEME_RE.match(value))


def ensure_scheme(url: str) -> str:
    """Trim and prepend https:// when the value has no scheme."""
    u = url.strip()
    if not has_scheme(u):
        u = "https://" + u
    return u
