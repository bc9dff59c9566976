"""
High-level SmartQR helpers.

This module ties the codec pieces together:

- Generate:
    - generate(...)          validate, build, optionally wrap, render locator

- Scan:
    - scan_text(...)         classify recovered text
    - scan_image(...)        run optical decoders, then classify
    - scan_generated(...)    classify a generated item and count the scan

- Protected envelopes:
    - reveal(...)            password gate for `protected` results

Rendering and optical decoding are delegated to the collaborators in
smartqr.render. Storing generated items is left to the caller.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime
from typing import Any, Dict, Iterable, Mapping, Optional

from . import config
from .builders import build_payload, coerce_category, describe_payload, validate_fields
from .classifier import classify
from .envelope import check_password, format_timestamp, wrap
from .models import (
    DecodedResult,
    ErrorResult,
    GeneratedItem,
    InvalidResult,
    ProtectedResult,
)
from .render import ImageDecoder, QRServerRenderer, Renderer

logger = logging.getLogger(__name__)

# Fields whose surrounding whitespace is meaningful.
_UNTRIMMED_FIELDS = {("wifi", "password"), ("text", "value")}


def _clean_fields(category: str, fields: Mapping[str, Any]) -> Dict[str, Any]:
    cleaned: Dict[str, Any] = {}
    for key, value in fields.items():
        if isinstance(value, str) and (category, key) not in _UNTRIMMED_FIELDS:
            value = value.strip()
        cleaned[key] = value
    return cleaned


# ---------------------------------------------------------------------------
# Generate
# ---------------------------------------------------------------------------


def generate(
    category: Any,
    fields: Mapping[str, Any],
    *,
    expiry_date: Optional[Any] = None,
    password: Optional[str] = None,
    item_id: Optional[str] = None,
    now: Optional[datetime] = None,
    renderer: Optional[Renderer] = None,
) -> GeneratedItem:
    """
    Build a generated item from raw user fields.

    Raises PayloadValidationError when a required field is missing. The
    payload is wrapped in an envelope only when an expiry date or password
    is requested.
    """
    cat = coerce_category(category)
    cleaned = _clean_fields(cat.value, fields)

    validate_fields(cat, cleaned)
    payload = build_payload(cat, cleaned)
    preview = describe_payload(cat, cleaned)

    full_content = payload
    if expiry_date or password:
        full_content = wrap(cat.value, payload, expiry_date, password, now=now)

    renderer = renderer or QRServerRenderer()
    qr_url = renderer.render(full_content, config.render_size())

    return GeneratedItem(
        id=item_id or uuid.uuid4().hex,
        type=cat,
        content=preview,
        full_content=full_content,
        qr_url=qr_url,
        created_at=format_timestamp(now or datetime.now().astimezone()),
        settings={
            "has_expiry": bool(expiry_date),
            "expiry_date": expiry_date or None,
            "has_password": bool(password),
        },
    )


# ---------------------------------------------------------------------------
# Scan
# ---------------------------------------------------------------------------


def scan_text(text: str, *, now: Optional[datetime] = None) -> DecodedResult:
    return classify(text, now=now)


def scan_image(
    image: Any,
    decoders: Iterable[ImageDecoder],
    *,
    now: Optional[datetime] = None,
) -> DecodedResult:
    """
    Decode an image with the first optical decoder that finds a code.

    A decoder that raises is logged and the next one is tried.
    """
    decoded: Optional[str] = None
    for decoder in decoders:
        try:
            decoded = decoder.decode(image)
        except Exception as exc:  # noqa: BLE001
            logger.warning("QR decoder %s failed, trying next: %s", type(decoder).__name__, exc)
            continue
        if decoded:
            break

    if not decoded:
        return InvalidResult(
            content="Unable to decode QR code from image",
            action="Retry with a clearer image",
        )

    try:
        return classify(decoded, now=now)
    except Exception:  # noqa: BLE001
        logger.exception("Error while classifying scanned QR text")
        return ErrorResult()


def scan_generated(item: GeneratedItem, *, now: Optional[datetime] = None) -> DecodedResult:
    """
    Classify a generated item's own content and count the scan on it.
    """
    result = classify(item.full_content, now=now)
    item.record_scan()
    return result


# ---------------------------------------------------------------------------
# Protected envelopes
# ---------------------------------------------------------------------------


def reveal(
    result: DecodedResult,
    password_attempt: Optional[str],
    *,
    now: Optional[datetime] = None,
) -> Optional[DecodedResult]:
    """
    Unlock a `protected` result.

    Returns the decoded inner payload (with the envelope attached) when the
    password matches, None otherwise. The protected result is never changed.
    """
    if not isinstance(result, ProtectedResult) or result.envelope is None:
        return None

    env = result.envelope
    if not check_password(env, password_attempt):
        return None

    inner = classify(env.payload, now=now)
    inner.envelope = env
    return inner
