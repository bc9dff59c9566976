"""
MIT License
Copyright (c) 2025 DarekDGB

Core data models for SmartQR.

These describe the objects that flow through the codec:
- payload categories (what a builder can produce)
- envelopes (optional expiry / password wrapper around a payload)
- decoded results (one tagged variant per category plus control tags)
- generated items (what a caller may keep in its history)
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, ClassVar, Dict, Optional


class PayloadCategory(str, Enum):
    URL = "url"
    TEXT = "text"
    EMAIL = "email"
    PHONE = "phone"
    PORTFOLIO = "portfolio"
    SOCIAL = "social"
    WIFI = "wifi"
    PAYMENT = "payment"
    VCARD = "vcard"
    WHATSAPP = "whatsapp"
    MAPS = "maps"
    YOUTUBE = "youtube"


class ResultType(str, Enum):
    URL = "url"
    TEXT = "text"
    EMAIL = "email"
    PHONE = "phone"
    PORTFOLIO = "portfolio"
    SOCIAL = "social"
    WIFI = "wifi"
    PAYMENT = "payment"
    VCARD = "vcard"
    WHATSAPP = "whatsapp"
    MAPS = "maps"
    YOUTUBE = "youtube"

    # control tags
    INVALID = "invalid"
    EXPIRED = "expired"
    PROTECTED = "protected"
    ERROR = "error"


@dataclass(frozen=True)
class Envelope:
    """
    Expiry / password wrapper around a canonical payload.

    `payload_type` is kept as the raw category string so that envelopes
    written by other producers still decode. The `smqr` marker is implied
    by the type and only exists on the wire.
    """
    payload_type: str
    payload: str
    created_at: str
    expiry_date: Optional[Any] = None
    password: Optional[str] = None

    def to_record(self) -> Dict[str, Any]:
        # Key order matches the wire layout.
        return {
            "smqr": True,
            "payloadType": self.payload_type,
            "payload": self.payload,
            "expiryDate": self.expiry_date,
            "password": self.password,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Envelope":
        return cls(
            payload_type=record.get("payloadType"),
            payload=record["payload"],
            created_at=record.get("createdAt"),
            expiry_date=record.get("expiryDate") or None,
            password=record.get("password") or None,
        )


# ---------------------------------------------------------------------------
# Decoded results
# ---------------------------------------------------------------------------


@dataclass
class DecodedResult:
    """
    Base for every classifier result.

    `content` is a best-effort human string of the underlying payload,
    `action` a short label for what the caller should do with it.
    `envelope` is set when the result was unwrapped from an Envelope.
    """
    type: ClassVar[ResultType]

    content: str
    action: str = ""
    envelope: Optional[Envelope] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"type": self.type.value}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            if isinstance(value, Envelope):
                value = value.to_record()
            out[f.name] = value
        return out


@dataclass
class UrlResult(DecodedResult):
    type: ClassVar[ResultType] = ResultType.URL
    action: str = "Open URL"
    url: Optional[str] = None


@dataclass
class TextResult(DecodedResult):
    type: ClassVar[ResultType] = ResultType.TEXT
    action: str = "Text Content"


@dataclass
class EmailResult(DecodedResult):
    type: ClassVar[ResultType] = ResultType.EMAIL
    action: str = "Send Email"
    email: Optional[str] = None


@dataclass
class PhoneResult(DecodedResult):
    type: ClassVar[ResultType] = ResultType.PHONE
    action: str = "Call Number"
    phone: Optional[str] = None


@dataclass
class PortfolioResult(DecodedResult):
    type: ClassVar[ResultType] = ResultType.PORTFOLIO
    action: str = "Open Portfolio"
    url: Optional[str] = None


@dataclass
class SocialResult(DecodedResult):
    type: ClassVar[ResultType] = ResultType.SOCIAL
    action: str = "Open Social"
    platform: Optional[str] = None
    url: Optional[str] = None


@dataclass
class WifiResult(DecodedResult):
    type: ClassVar[ResultType] = ResultType.WIFI
    action: str = "Connect WiFi"
    ssid: Optional[str] = None
    password: Optional[str] = None
    security: Optional[str] = None


@dataclass
class PaymentResult(DecodedResult):
    type: ClassVar[ResultType] = ResultType.PAYMENT
    action: str = "Open Payment"
    provider: Optional[str] = None
    params: Optional[Dict[str, str]] = None
    url: Optional[str] = None


@dataclass
class VCardResult(DecodedResult):
    type: ClassVar[ResultType] = ResultType.VCARD
    action: str = "Save Contact"
    full_name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    org: Optional[str] = None
    address: Optional[str] = None
    title: Optional[str] = None
    website: Optional[str] = None


@dataclass
class WhatsAppResult(DecodedResult):
    type: ClassVar[ResultType] = ResultType.WHATSAPP
    action: str = "Open WhatsApp"
    phone: Optional[str] = None
    message: Optional[str] = None
    url: Optional[str] = None


@dataclass
class MapsResult(DecodedResult):
    type: ClassVar[ResultType] = ResultType.MAPS
    action: str = "Open Maps"
    url: Optional[str] = None


@dataclass
class YouTubeResult(DecodedResult):
    type: ClassVar[ResultType] = ResultType.YOUTUBE
    action: str = "Watch Video"
    video_id: Optional[str] = None
    url: Optional[str] = None


@dataclass
class InvalidResult(DecodedResult):
    type: ClassVar[ResultType] = ResultType.INVALID
    content: str = "Invalid secured QR format"
    action: str = "Invalid"


@dataclass
class ExpiredResult(DecodedResult):
    type: ClassVar[ResultType] = ResultType.EXPIRED
    content: str = "QR Code Expired"
    action: str = "Expired"
    expiry_date: Optional[Any] = None


@dataclass
class ProtectedResult(DecodedResult):
    """
    Password-gated envelope. The payload is not decoded until a correct
    password is supplied (see smartqr.protocol.reveal).
    """
    type: ClassVar[ResultType] = ResultType.PROTECTED
    action: str = "Requires Password"


@dataclass
class ErrorResult(DecodedResult):
    type: ClassVar[ResultType] = ResultType.ERROR
    content: str = "Error while scanning QR code"
    action: str = "See console for details"


# ---------------------------------------------------------------------------
# Generated items
# ---------------------------------------------------------------------------


@dataclass
class GeneratedItem:
    """
    A generated QR code as a caller would keep it in its history.

    `content` is the short preview, `full_content` the exact text that is
    optically encoded (possibly an envelope).
    """
    id: str
    type: PayloadCategory
    content: str
    full_content: str
    qr_url: str
    created_at: str

    settings: Dict[str, Any] = field(default_factory=dict)
    scan_count: int = 0

    def record_scan(self) -> int:
        self.scan_count += 1
        return self.scan_count
