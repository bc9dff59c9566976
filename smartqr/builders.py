"""
Payload builders for SmartQR.

One pure function per category, each returning the canonical text that
gets optically encoded:

- build_wifi(...)       WIFI:T:<SEC>;S:<ssid>;P:<password>;;
- build_upi(...)        upi://pay?pa=..&pn=..&am=..&tn=..&cu=INR
- build_vcard(...)      BEGIN:VCARD ... END:VCARD
- build_whatsapp(...)   https://api.whatsapp.com/send?phone=..&text=..
- build_maps(...)       Google Maps query / search URL
- build_social(...)     profile URL
- build_youtube(...)    https://youtube.com/watch?v=<id>
- build_url / build_portfolio / build_email / build_phone / build_text

Builders do not check required fields; validate_fields() does that for
callers that take raw user input.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Mapping, Optional
from urllib.parse import quote, urlencode

from .models import PayloadCategory
from .text import (
    canonical_url,
    ensure_scheme,
    escape_list_separator,
    escape_newlines,
    normalize_phone,
    parse_absolute_url,
)
from .youtube import WATCH_URL, extract_youtube_id


# Characters encodeURIComponent leaves alone.
_URI_COMPONENT_SAFE = "-_.!~*'()"

WHATSAPP_SEND_URL = "https://api.whatsapp.com/send"
MAPS_URL = "https://www.google.com/maps"
UPI_CURRENCY = "INR"

_SOCIAL_TEMPLATES = {
    "instagram": "https://instagram.com/{}",
    "facebook": "https://facebook.com/{}",
    "linkedin": "https://www.linkedin.com/in/{}",
    "telegram": "https://t.me/{}",
}


class PayloadValidationError(ValueError):
    pass


def _present(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    return True


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------


def build_wifi(ssid: str, password: Optional[str] = None, security: Optional[str] = None) -> str:
    token = security.upper() if security and security.lower() != "open" else "nopass"
    if token == "nopass":
        return f"WIFI:T:nopass;S:{escape_list_separator(ssid)};;"
    return f"WIFI:T:{token};S:{escape_list_separator(ssid)};P:{escape_list_separator(password)};;"


def build_upi(
    pa: Optional[str] = None,
    pn: Optional[str] = None,
    am: Optional[str] = None,
    tn: Optional[str] = None,
) -> str:
    """
    Build a UPI payment URI.

    Only truthy parameters are emitted, in the fixed order pa, pn, am, tn;
    cu=INR always comes last.
    """
    params = [(k, v) for k, v in (("pa", pa), ("pn", pn), ("am", am), ("tn", tn)) if v]
    params.append(("cu", UPI_CURRENCY))
    return f"upi://pay?{urlencode(params)}"


def build_vcard(
    full_name: Optional[str] = None,
    phone: Optional[str] = None,
    email: Optional[str] = None,
    address: Optional[str] = None,
    org: Optional[str] = None,
    title: Optional[str] = None,
    website: Optional[str] = None,
) -> str:
    """
    Build a vCard 3.0 record.

    The phone number is stored as given (no normalization). The address
    only fills the street component of the 7-part ADR value.
    """
    lines = ["BEGIN:VCARD", "VERSION:3.0"]
    if full_name:
        lines.append(f"FN:{escape_newlines(full_name)}")
    if org:
        lines.append(f"ORG:{escape_newlines(org)}")
    if title:
        lines.append(f"TITLE:{escape_newlines(title)}")
    if phone:
        lines.append(f"TEL;TYPE=CELL:{escape_newlines(phone)}")
    if email:
        lines.append(f"EMAIL:{escape_newlines(email)}")
    if address:
        lines.append(f"ADR:;;{escape_newlines(address)};;;;")
    if website:
        lines.append(f"URL:{escape_newlines(website)}")
    lines.append("END:VCARD")
    return "\n".join(lines)


def build_whatsapp(phone: str, message: Optional[str] = None) -> str:
    digits = (normalize_phone(phone) or "").replace("+", "", 1)
    url = f"{WHATSAPP_SEND_URL}?phone={digits}"
    if message:
        url += "&text=" + quote(message, safe=_URI_COMPONENT_SAFE)
    return url


def build_maps(place_name: Optional[str] = None, lat: Any = None, lon: Any = None) -> str:
    """Coordinates win over the place name when both are given."""
    if _present(lat) and _present(lon):
        return f"{MAPS_URL}?q={str(lat).strip()},{str(lon).strip()}&z=15"
    query = quote(place_name or "", safe=_URI_COMPONENT_SAFE)
    return f"{MAPS_URL}/search/?api=1&query={query}"


def build_social(platform: str, profile: str) -> str:
    parts = parse_absolute_url(profile)
    if parts is not None:
        return canonical_url(parts)

    username = profile[1:] if profile.startswith("@") else profile
    username = username.strip()

    if platform in _SOCIAL_TEMPLATES:
        return _SOCIAL_TEMPLATES[platform].format(username)
    if platform == "youtube":
        if username.startswith("@"):
            return f"https://youtube.com/{username}"
        return f"https://youtube.com/@{username}"
    return profile


def build_youtube(url: str) -> str:
    video_id = extract_youtube_id(url)
    if video_id:
        return WATCH_URL + video_id
    return url


def build_url(url: str) -> str:
    return ensure_scheme(url)


def build_portfolio(url: str) -> str:
    return ensure_scheme(url)


def build_email(address: str) -> str:
    return f"mailto:{address.strip()}"


def build_phone(number: str) -> str:
    return f"tel:{normalize_phone(number.strip())}"


def build_text(text: str) -> str:
    return text


# ---------------------------------------------------------------------------
# Dispatch by category
# ---------------------------------------------------------------------------


_BUILDERS: Dict[PayloadCategory, Callable[[Mapping[str, Any]], str]] = {
    PayloadCategory.URL: lambda f: build_url(f["value"]),
    PayloadCategory.TEXT: lambda f: build_text(f["value"]),
    PayloadCategory.EMAIL: lambda f: build_email(f["value"]),
    PayloadCategory.PHONE: lambda f: build_phone(f["value"]),
    PayloadCategory.PORTFOLIO: lambda f: build_portfolio(f["url"]),
    PayloadCategory.SOCIAL: lambda f: build_social(f.get("platform", "instagram"), f["profile"]),
    PayloadCategory.WIFI: lambda f: build_wifi(f["ssid"], f.get("password"), f.get("security")),
    PayloadCategory.PAYMENT: lambda f: build_upi(f.get("pa"), f.get("pn"), f.get("am"), f.get("tn")),
    PayloadCategory.VCARD: lambda f: build_vcard(
        full_name=f.get("full_name"),
        phone=f.get("phone"),
        email=f.get("email"),
        address=f.get("address"),
        org=f.get("org"),
        title=f.get("title"),
        website=f.get("website"),
    ),
    PayloadCategory.WHATSAPP: lambda f: build_whatsapp(f["phone"], f.get("message")),
    PayloadCategory.MAPS: lambda f: build_maps(f.get("place_name"), f.get("lat"), f.get("lon")),
    PayloadCategory.YOUTUBE: lambda f: build_youtube(f["url"]),
}


def coerce_category(category: Any) -> PayloadCategory:
    try:
        return PayloadCategory(category)
    except ValueError as exc:
        raise ValueError(f"Unsupported payload category: {category!r}") from exc


def build_payload(category: Any, fields: Mapping[str, Any]) -> str:
    """
    Build the canonical text for `category` from a field mapping.

    Field names follow the builder keyword names; the single-value
    categories (url, text, email, phone) take their input as `value`.
    """
    return _BUILDERS[coerce_category(category)](fields)


# ---------------------------------------------------------------------------
# Required fields and previews
# ---------------------------------------------------------------------------


_REQUIRED = {
    PayloadCategory.URL: ("value", "Please enter a URL"),
    PayloadCategory.TEXT: ("value", "Please enter text"),
    PayloadCategory.EMAIL: ("value", "Please enter email"),
    PayloadCategory.PHONE: ("value", "Please enter phone number"),
    PayloadCategory.PORTFOLIO: ("url", "Please enter portfolio URL"),
    PayloadCategory.SOCIAL: ("profile", "Please enter username or profile URL"),
    PayloadCategory.WIFI: ("ssid", "Please enter SSID"),
    PayloadCategory.PAYMENT: ("pa", "Please enter UPI ID or mobile number"),
    PayloadCategory.WHATSAPP: ("phone", "Please enter phone number for WhatsApp"),
    PayloadCategory.YOUTUBE: ("url", "Please enter YouTube video URL"),
}


def validate_fields(category: Any, fields: Mapping[str, Any]) -> None:
    """
    Check the fields a category cannot be built without.

    Raises PayloadValidationError naming what is missing.
    """
    cat = coerce_category(category)

    if cat is PayloadCategory.VCARD:
        if not _present(fields.get("full_name")) and not _present(fields.get("phone")):
            raise PayloadValidationError("Please enter at least a name or phone number for vCard")
        return

    if cat is PayloadCategory.MAPS:
        has_coords = _present(fields.get("lat")) and _present(fields.get("lon"))
        if not has_coords and not _present(fields.get("place_name")):
            raise PayloadValidationError("Please enter a place name or latitude & longitude")
        return

    key, message = _REQUIRED[cat]
    if not _present(fields.get(key)):
        raise PayloadValidationError(message)


def describe_payload(category: Any, fields: Mapping[str, Any]) -> str:
    """Short human preview of what a generated code contains."""
    cat = coerce_category(category)
    f = fields

    if cat is PayloadCategory.URL:
        return build_url(f["value"])
    if cat is PayloadCategory.TEXT:
        return f["value"][:80]
    if cat is PayloadCategory.EMAIL:
        return f["value"].strip()
    if cat is PayloadCategory.PHONE:
        return normalize_phone(f["value"].strip()) or ""
    if cat is PayloadCategory.PORTFOLIO:
        return f"Portfolio: {build_portfolio(f['url'])}"
    if cat is PayloadCategory.SOCIAL:
        return f"{f.get('platform', 'instagram')}: {f['profile']}"
    if cat is PayloadCategory.WIFI:
        return f"WiFi: {f['ssid']}"
    if cat is PayloadCategory.PAYMENT:
        return f"UPI: {f['pa']}"
    if cat is PayloadCategory.VCARD:
        return f"vCard: {f.get('full_name') or f.get('phone')}"
    if cat is PayloadCategory.WHATSAPP:
        return f"WhatsApp: {f['phone']}"
    if cat is PayloadCategory.MAPS:
        where = f.get("place_name") or f"{f.get('lat')},{f.get('lon')}"
        return f"Maps: {where}"
    video_id = extract_youtube_id(f["url"])
    return f"YouTube Video: {video_id}" if video_id else f"YouTube: {f['url']}"
