"""
SmartQR classifier.

classify() maps arbitrary recovered text to a DecodedResult. It is total:
malformed input degrades to a partial result for the branch that claimed
it, unknown input becomes a text result, and nothing is ever raised.

Branches are tried in a fixed order and the first match wins. The order is
load-bearing because predicates overlap (a WhatsApp link is also a URL).
"""

from __future__ import annotations

import logging
import re
from datetime import datetime
from typing import Callable, List, Optional, Tuple
from urllib.parse import parse_qsl, unquote, urlsplit

from .envelope import ENVELOPE_PREFIX, is_expired, unwrap
from .models import (
    DecodedResult,
    EmailResult,
    ExpiredResult,
    InvalidResult,
    MapsResult,
    PaymentResult,
    PhoneResult,
    PortfolioResult,
    ProtectedResult,
    SocialResult,
    TextResult,
    UrlResult,
    VCardResult,
    WhatsAppResult,
    WifiResult,
    YouTubeResult,
)
from .text import parse_absolute_url
from .youtube import extract_youtube_id

logger = logging.getLogger(__name__)

# Builders never nest envelopes; this only stops pathological input.
MAX_ENVELOPE_DEPTH = 8

_WIFI_PREFIX_RE = re.compile(r"^WIFI:", re.IGNORECASE)
_LINE_SPLIT_RE = re.compile(r"\r?\n")

_YOUTUBE_HOSTS = ("youtube.com", "youtu.be")
_PORTFOLIO_HINTS = ("portfolio", "personal", "cv", "resume")

# (domain, platform), checked in order
SOCIAL_DOMAINS: Tuple[Tuple[str, str], ...] = (
    ("instagram.com", "instagram"),
    ("facebook.com", "facebook"),
    ("linkedin.com", "linkedin"),
    ("t.me", "telegram"),
    ("telegram.me", "telegram"),
    ("youtube.com", "youtube"),
    ("youtu.be", "youtube"),
)


# ---------------------------------------------------------------------------
# Branch handlers
# ---------------------------------------------------------------------------


def _classify_envelope(text: str, now: Optional[datetime], depth: int) -> DecodedResult:
    if depth >= MAX_ENVELOPE_DEPTH:
        logger.debug("Envelope nesting deeper than %d, rejecting", MAX_ENVELOPE_DEPTH)
        return InvalidResult()

    env = unwrap(text)
    if env is None:
        return InvalidResult()
    if is_expired(env.expiry_date, now=now):
        return ExpiredResult(expiry_date=env.expiry_date)
    if env.password:
        return ProtectedResult(content=f"Protected {env.payload_type}", envelope=env)

    inner = _classify(env.payload, now, depth + 1)
    inner.envelope = env
    return inner


def _classify_wifi(text: str) -> DecodedResult:
    try:
        data = {}
        for part in text[5:].split(";"):
            if not part:
                continue
            key, _, value = part.partition(":")
            data[key] = value
        return WifiResult(
            content=text,
            ssid=data.get("S") or data.get("s") or data.get("SSID") or data.get("ssid"),
            password=data.get("P") or data.get("p") or "",
            security=data.get("T") or data.get("t") or "WPA",
        )
    except Exception as exc:  # noqa: BLE001
        logger.debug("WiFi payload not parseable: %s", exc)
        return WifiResult(content=text)


def _second_component(line: str) -> Optional[str]:
    parts = line.split(":")
    if len(parts) > 1 and parts[1]:
        return parts[1]
    return None


def _classify_vcard(text: str) -> DecodedResult:
    out = VCardResult(content=text)
    for line in _LINE_SPLIT_RE.split(text):
        if line.startswith("FN:"):
            out.full_name = line[3:].strip()
        if line.startswith("TEL"):
            value = _second_component(line)
            if value:
                out.phone = value.strip()
        if line.startswith("EMAIL"):
            value = _second_component(line)
            if value:
                out.email = value.strip()
        if line.startswith("ORG:"):
            out.org = line[4:].strip()
        if line.startswith("ADR"):
            value = _second_component(line)
            if value:
                out.address = value.replace(";;", " ").strip()
        if line.startswith("TITLE:"):
            out.title = line[6:].strip()
        if line.startswith("URL:"):
            out.website = line[4:].strip()
    return out


def _classify_whatsapp(text: str) -> DecodedResult:
    parts = parse_absolute_url(text)
    if parts is None:
        logger.debug("WhatsApp link not parseable as URL, keeping raw text")
        return WhatsAppResult(content=text, url=text)

    query = dict(parse_qsl(parts.query, keep_blank_values=True))
    phone = query.get("phone") or unquote(parts.path.lstrip("/"))
    message = query.get("text") or ""
    return WhatsAppResult(content=text, phone=phone, message=message, url=text)


def _classify_payment(text: str) -> DecodedResult:
    normalized = text if text.startswith("upi://") else "upi://" + text.replace("upi:", "", 1)
    try:
        if any(c.isspace() for c in normalized):
            raise ValueError("whitespace in UPI URI")
        parts = urlsplit(normalized)
        params = dict(parse_qsl(parts.query, keep_blank_values=True))
    except ValueError as exc:
        logger.debug("UPI payload not parseable: %s", exc)
        return PaymentResult(content=text, url=text)
    return PaymentResult(content=text, provider="UPI", params=params, url=text)


def _classify_maps(text: str) -> DecodedResult:
    return MapsResult(content=text, url=text)


def _classify_generic_url(text: str) -> DecodedResult:
    parts = parse_absolute_url(text)
    host = (parts.hostname or "").lower() if parts is not None else ""

    if any(h in host for h in _YOUTUBE_HOSTS):
        video_id = extract_youtube_id(text)
        if video_id:
            return YouTubeResult(content=text, url=text, video_id=video_id)

    if any(hint in host for hint in _PORTFOLIO_HINTS):
        return PortfolioResult(content=text, url=text)

    for domain, platform in SOCIAL_DOMAINS:
        if domain in host:
            return SocialResult(content=text, platform=platform, url=text)

    return UrlResult(content=text, url=text)


# ---------------------------------------------------------------------------
# Priority chain
# ---------------------------------------------------------------------------


def _is_whatsapp(text: str) -> bool:
    return "whatsapp" in text or "wa.me" in text or text.startswith("https://api.whatsapp.com")


def _is_upi(text: str) -> bool:
    return text.startswith("upi:") or "upi://" in text


def _is_maps(text: str) -> bool:
    return (
        text.startswith("geo:")
        or "google.com/maps" in text
        or "maps.google.com" in text
        or text.startswith("https://maps.app.goo.gl/")
    )


_Handler = Callable[[str], DecodedResult]

# Envelope handling needs the clock and depth, so it runs ahead of this list.
_CHAIN: List[Tuple[Callable[[str], bool], _Handler]] = [
    (lambda t: bool(_WIFI_PREFIX_RE.match(t)), _classify_wifi),
    (lambda t: t.startswith("BEGIN:VCARD"), _classify_vcard),
    (_is_whatsapp, _classify_whatsapp),
    (_is_upi, _classify_payment),
    (_is_maps, _classify_maps),
    (lambda t: parse_absolute_url(t) is not None, _classify_generic_url),
    (lambda t: t.startswith("mailto:"), lambda t: EmailResult(content=t, email=t[len("mailto:") :])),
    (lambda t: t.startswith("tel:"), lambda t: PhoneResult(content=t, phone=t[len("tel:") :])),
]


def _classify(text: str, now: Optional[datetime], depth: int) -> DecodedResult:
    if text.startswith(ENVELOPE_PREFIX):
        return _classify_envelope(text, now, depth)

    for predicate, handler in _CHAIN:
        if not predicate(text):
            continue
        try:
            result = handler(text)
        except Exception as exc:  # noqa: BLE001
            logger.debug("Handler %s failed, trying next branch: %s", getattr(handler, "__name__", handler), exc)
            continue
        return result

    return TextResult(content=text)


def classify(text: str, *, now: Optional[datetime] = None) -> DecodedResult:
    """
    Classify recovered QR text into a typed result.

    `now` overrides the wall clock for envelope expiry checks.
    """
    if not isinstance(text, str):
        text = "" if text is None else str(text)
    try:
        return _classify(text, now, 0)
    except Exception as exc:  # noqa: BLE001
        logger.debug("Classifier failed, falling back to text: %s", exc)
        return TextResult(content=text)
