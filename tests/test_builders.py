from __future__ import annotations

from urllib.parse import parse_qsl, urlsplit

import pytest

from smartqr.builders import (
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
    describe_payload,
    validate_fields,
)


# ---------------------------------------------------------------------------
# WiFi
# ---------------------------------------------------------------------------


def test_wifi_open_network_uses_nopass() -> None:
    assert build_wifi(ssid="MyNet", security="open") == "WIFI:T:nopass;S:MyNet;;"
    assert build_wifi(ssid="MyNet", security="OPEN", password="ignored") == "WIFI:T:nopass;S:MyNet;;"
    assert build_wifi(ssid="MyNet") == "WIFI:T:nopass;S:MyNet;;"


def test_wifi_secured_network() -> None:
    assert build_wifi(ssid="MyNet", password="p@ss", security="WPA2") == "WIFI:T:WPA2;S:MyNet;P:p@ss;;"
    assert build_wifi(ssid="MyNet", password="x", security="wep") == "WIFI:T:WEP;S:MyNet;P:x;;"


def test_wifi_escapes_separators() -> None:
    assert build_wifi(ssid="My;Net", password="a\\b", security="WPA") == "WIFI:T:WPA;S:My\\;Net;P:a\\\\b;;"


# ---------------------------------------------------------------------------
# UPI
# ---------------------------------------------------------------------------


def test_upi_skips_missing_params_and_appends_currency() -> None:
    uri = build_upi(pa="a@bank", am="10")
    parts = urlsplit(uri)
    assert parts.scheme == "upi"
    assert [k for k, _ in parse_qsl(parts.query)] == ["pa", "am", "cu"]
    assert uri == "upi://pay?pa=a%40bank&am=10&cu=INR"


def test_upi_full_param_order_and_encoding() -> None:
    uri = build_upi(pa="shop@upi", pn="Corner Shop", am="49.50", tn="Tea & cake")
    pairs = parse_qsl(urlsplit(uri).query)
    assert pairs == [
        ("pa", "shop@upi"),
        ("pn", "Corner Shop"),
        ("am", "49.50"),
        ("tn", "Tea & cake"),
        ("cu", "INR"),
    ]


# ---------------------------------------------------------------------------
# vCard
# ---------------------------------------------------------------------------


def test_vcard_emits_only_present_fields_in_order() -> None:
    card = build_vcard(full_name="Jane Doe", phone="+1 555 0100", address="1 Main St")
    assert card.split("\n") == [
        "BEGIN:VCARD",
        "VERSION:3.0",
        "FN:Jane Doe",
        "TEL;TYPE=CELL:+1 555 0100",
        "ADR:;;1 Main St;;;;",
        "END:VCARD",
    ]


def test_vcard_full_record_and_newline_escape() -> None:
    card = build_vcard(
        full_name="Jane Doe",
        phone="555",
        email="jane@example.com",
        address="1 Main St\nSpringfield",
        org="Acme",
        title="CEO",
        website="https://jane.example",
    )
    assert card.split("\n") == [
        "BEGIN:VCARD",
        "VERSION:3.0",
        "FN:Jane Doe",
        "ORG:Acme",
        "TITLE:CEO",
        "TEL;TYPE=CELL:555",
        "EMAIL:jane@example.com",
        "ADR:;;1 Main St\\nSpringfield;;;;",
        "URL:https://jane.example",
        "END:VCARD",
    ]


# ---------------------------------------------------------------------------
# WhatsApp / Maps / Social
# ---------------------------------------------------------------------------


def test_whatsapp_normalizes_phone_and_encodes_text() -> None:
    assert (
        build_whatsapp("+91 98765-43210", "Hello there!")
        == "https://api.whatsapp.com/send?phone=919876543210&text=Hello%20there!"
    )
    assert build_whatsapp("(555) 0100") == "https://api.whatsapp.com/send?phone=5550100"


def test_maps_coordinates_win_over_place() -> None:
    assert build_maps(place_name="Eiffel Tower", lat="48.8584", lon="2.2945") == (
        "https://www.google.com/maps?q=48.8584,2.2945&z=15"
    )
    assert build_maps(lat=12.5, lon=77.25) == "https://www.google.com/maps?q=12.5,77.25&z=15"


def test_maps_place_search() -> None:
    assert build_maps(place_name="Eiffel Tower") == (
        "https://www.google.com/maps/search/?api=1&query=Eiffel%20Tower"
    )
    # only one coordinate falls back to the place name
    assert build_maps(place_name="Cafe", lat="1.0") == (
        "https://www.google.com/maps/search/?api=1&query=Cafe"
    )


@pytest.mark.parametrize(
    "platform,profile,expected",
    [
        ("instagram", "@jane", "https://instagram.com/jane"),
        ("facebook", "jane.doe", "https://facebook.com/jane.doe"),
        ("linkedin", "jdoe", "https://www.linkedin.com/in/jdoe"),
        ("telegram", "@jane_t", "https://t.me/jane_t"),
        ("youtube", "chan", "https://youtube.com/@chan"),
        ("youtube", "@chan", "https://youtube.com/@chan"),
        ("youtube", "@@chan", "https://youtube.com/@chan"),
        ("myspace", "@tom", "@tom"),
    ],
)
def test_social_templates(platform: str, profile: str, expected: str) -> None:
    assert build_social(platform, profile) == expected


def test_social_absolute_url_passes_through() -> None:
    assert build_social("instagram", "https://instagram.com/jane") == "https://instagram.com/jane"
    assert build_social("facebook", "https://facebook.com") == "https://facebook.com/"


def test_social_absolute_url_lowercases_scheme_and_host() -> None:
    assert build_social("instagram", "https://Instagram.com/x") == "https://instagram.com/x"
    assert build_social("facebook", "HTTPS://WWW.Facebook.COM/Jane") == "https://www.facebook.com/Jane"
    assert build_social("linkedin", "https://User:Pw@LinkedIn.com:443/in/x") == "https://User:Pw@linkedin.com:443/in/x"


# ---------------------------------------------------------------------------
# Simple categories
# ---------------------------------------------------------------------------


def test_simple_builders() -> None:
    assert build_url("example.com") == "https://example.com"
    assert build_portfolio("jane.dev") == "https://jane.dev"
    assert build_email(" jane@example.com ") == "mailto:jane@example.com"
    assert build_phone(" +1 (555) 010-0000 ") == "tel:+15550100000"
    assert build_text("  keep  me  ") == "  keep  me  "


def test_build_payload_dispatch() -> None:
    assert build_payload("wifi", {"ssid": "MyNet", "security": "open"}) == "WIFI:T:nopass;S:MyNet;;"
    assert build_payload("url", {"value": "example.com"}) == "https://example.com"
    assert build_payload("social", {"platform": "telegram", "profile": "jane"}) == "https://t.me/jane"


def test_build_payload_rejects_unknown_category() -> None:
    with pytest.raises(ValueError):
        build_payload("fax", {"value": "123"})


# ---------------------------------------------------------------------------
# Validation and previews
# ---------------------------------------------------------------------------


def test_validate_fields_missing_required() -> None:
    with pytest.raises(PayloadValidationError):
        validate_fields("wifi", {"ssid": "   "})
    with pytest.raises(PayloadValidationError):
        validate_fields("payment", {"pn": "Shop"})
    with pytest.raises(PayloadValidationError):
        validate_fields("vcard", {"email": "a@b.c"})
    with pytest.raises(PayloadValidationError):
        validate_fields("maps", {"lat": "1.0"})


def test_validate_fields_accepts_alternatives() -> None:
    validate_fields("vcard", {"phone": "555"})
    validate_fields("maps", {"lat": "1.0", "lon": "2.0"})
    validate_fields("maps", {"place_name": "Cafe"})
    validate_fields("text", {"value": "hi"})


def test_validation_error_is_value_error() -> None:
    assert issubclass(PayloadValidationError, ValueError)


def test_describe_payload() -> None:
    assert describe_payload("wifi", {"ssid": "Home"}) == "WiFi: Home"
    assert describe_payload("payment", {"pa": "shop@upi"}) == "UPI: shop@upi"
    assert describe_payload("vcard", {"phone": "555"}) == "vCard: 555"
    assert describe_payload("maps", {"lat": "1", "lon": "2"}) == "Maps: 1,2"
    assert describe_payload("phone", {"value": "+1 555"}) == "+1555"
    assert describe_payload("text", {"value": "x" * 100}) == "x" * 80
    assert describe_payload("youtube", {"url": "https://youtu.be/dQw4w9WgXcQ"}) == "YouTube Video: dQw4w9WgXcQ"
    assert describe_payload("youtube", {"url": "https://vimeo.com/1"}) == "YouTube: https://vimeo.com/1"
