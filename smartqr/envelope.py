"""
MIT License
Copyright (c) 2025 DarekDGB

SmartQR envelope codec (wire-locked).

Format:
    SMQR:<base64(JSON)>

JSON record (compact, keys in this order):
{
  "smqr": true,
  "payloadType": "url",
  "payload": "https://example.com",
  "expiryDate": "2026-12-31" | null,
  "password": "secret" | null,
  "createdAt": "2026-01-01T00:00:00.000Z"
}

Rules:
- Standard base64 (with padding) over UTF-8 JSON. Latin-1 records are
  accepted on decode.
- wrap() always succeeds.
- unwrap(), is_expired() and check_password() never raise. Malformed input
  reads as "not an envelope" / "not expired" / "wrong password".
- Expiry parse failures fail open (not expired).
"""

from __future__ import annotations

import base64
import binascii
import hmac
import json
import logging
from datetime import date, datetime, timezone
from typing import Any, Dict, Optional

from .models import Envelope

logger = logging.getLogger(__name__)

ENVELOPE_PREFIX = "SMQR:"


def _b64encode(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def _b64decode(token: str) -> bytes:
    """Decode standard base64, tolerating stripped padding."""
    token = token.strip()
    padding = "=" * (-len(token) % 4)
    return base64.b64decode(token + padding, validate=True)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(moment: datetime) -> str:
    """ISO-8601 UTC with millisecond precision and a 'Z' suffix."""
    if moment.tzinfo is None:
        moment = moment.astimezone()
    moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


def is_envelope(text: Any) -> bool:
    return isinstance(text, str) and text.startswith(ENVELOPE_PREFIX)


def wrap(
    payload_type: str,
    payload: str,
    expiry_date: Optional[Any] = None,
    password: Optional[str] = None,
    *,
    now: Optional[datetime] = None,
) -> str:
    """
    Wrap a canonical payload into an SMQR envelope string.

    Empty expiry / password values are written as null.
    """
    if isinstance(expiry_date, (datetime, date)):
        expiry_date = expiry_date.isoformat()
    envelope = Envelope(
        payload_type=str(getattr(payload_type, "value", payload_type)),
        payload=payload,
        created_at=format_timestamp(now or _utcnow()),
        expiry_date=expiry_date or None,
        password=password or None,
    )
    return encode_envelope(envelope)


def encode_envelope(envelope: Envelope) -> str:
    raw = json.dumps(envelope.to_record(), separators=(",", ":"), ensure_ascii=False)
    return ENVELOPE_PREFIX + _b64encode(raw.encode("utf-8"))


def _decode_record_bytes(raw: bytes) -> str:
    """
    UTF-8 first; fall back to Latin-1, which is what btoa() based producers
    write for non-ASCII characters.
    """
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        return raw.decode("latin-1")


def decode_envelope_record(text: str) -> Dict[str, Any]:
    """
    Fail-closed decoding of the raw envelope record.

    Raises ValueError on any problem. unwrap() is the non-raising wrapper.
    """
    if not is_envelope(text):
        raise ValueError("Not a SmartQR envelope (missing 'SMQR:' prefix).")

    token = text[len(ENVELOPE_PREFIX) :]
    try:
        raw = _b64decode(token)
        obj = json.loads(_decode_record_bytes(raw))
    except (binascii.Error, UnicodeDecodeError, ValueError) as exc:
        raise ValueError("Failed to decode SmartQR envelope.") from exc

    if not isinstance(obj, dict):
        raise ValueError("SmartQR envelope must be a JSON object.")
    if obj.get("smqr") is not True:
        raise ValueError("SmartQR envelope marker missing.")
    if not isinstance(obj.get("payload"), str):
        raise ValueError("SmartQR envelope 'payload' must be a string.")
    pw = obj.get("password")
    if pw is not None and not isinstance(pw, str):
        raise ValueError("SmartQR envelope 'password' must be a string or null.")

    return obj


def unwrap(text: str) -> Optional[Envelope]:
    """
    Return the Envelope carried by `text`, or None when it is not one.
    """
    if not is_envelope(text):
        return None
    try:
        return Envelope.from_record(decode_envelope_record(text))
    except Exception as exc:  # noqa: BLE001
        logger.debug("Rejected SmartQR envelope: %s", exc)
        return None


def _parse_expiry(expiry_date: Any) -> datetime:
    if isinstance(expiry_date, bool):
        raise TypeError("expiry date must not be a bool")
    if isinstance(expiry_date, (int, float)):
        # epoch milliseconds
        return datetime.fromtimestamp(expiry_date / 1000.0, tz=timezone.utc)
    if isinstance(expiry_date, datetime):
        moment = expiry_date
    elif isinstance(expiry_date, date):
        return datetime(expiry_date.year, expiry_date.month, expiry_date.day, tzinfo=timezone.utc)
    elif isinstance(expiry_date, str):
        s = expiry_date.strip()
        if len(s) == 10:
            # date-only forms are midnight UTC
            d = date.fromisoformat(s)
            return datetime(d.year, d.month, d.day, tzinfo=timezone.utc)
        if s.endswith(("Z", "z")):
            s = s[:-1] + "+00:00"
        moment = datetime.fromisoformat(s)
    else:
        raise TypeError(f"Unsupported expiry date type: {type(expiry_date).__name__}")

    if moment.tzinfo is None:
        # naive date-times are local wall time
        moment = moment.astimezone()
    return moment


def is_expired(expiry_date: Any, *, now: Optional[datetime] = None) -> bool:
    """
    True iff `now` is strictly later than the expiry instant.

    Missing expiry never expires. Unparseable expiry is treated as not
    expired (fail-open).
    """
    if not expiry_date:
        return False
    try:
        expiry = _parse_expiry(expiry_date)
        now_eff = now or _utcnow()
        if now_eff.tzinfo is None:
            now_eff = now_eff.astimezone()
        return now_eff > expiry
    except Exception as exc:  # noqa: BLE001
        logger.debug("Unparseable expiry date %r treated as not expired: %s", expiry_date, exc)
        return False


def check_password(envelope: Envelope, attempt: Optional[str]) -> bool:
    """
    Constant-time password comparison.

    Envelopes without a password accept any attempt.
    """
    if not envelope.password:
        return True
    if not isinstance(attempt, str):
        return False
    return hmac.compare_digest(envelope.password.encode("utf-8"), attempt.encode("utf-8"))
