"""
SmartQR: canonical QR payload builders, envelope codec and classifier.
"""

from .builders import (
    PayloadValidationError,
    build_email,
    build_maps,
    build_payload,
    build_phone,
    build_portfolio,
    build_social,
    build_text,
    build_upi,
    build_url,
    build_vcard,
    build_whatsapp,
    build_wifi,
    build_youtube,
)
from .classifier import classify
from .envelope import ENVELOPE_PREFIX, is_expired, unwrap, wrap
from .models import DecodedResult, Envelope, GeneratedItem, PayloadCategory, ResultType
from .youtube import extract_youtube_id

__all__: list[str] = [
    "ENVELOPE_PREFIX",
    "DecodedResult",
    "Envelope",
    "GeneratedItem",
    "PayloadCategory",
    "PayloadValidationError",
    "ResultType",
    "build_email",
    "build_maps",
    "build_payload",
    "build_phone",
    "build_portfolio",
    "build_social",
    "build_text",
    "build_upi",
    "build_url",
    "build_vcard",
    "build_whatsapp",
    "build_wifi",
    "build_youtube",
    "classify",
    "extract_youtube_id",
    "is_expired",
    "unwrap",
    "wrap",
]
