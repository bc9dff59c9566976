from smartqr.text import (
    ensure_scheme,
    escape_list_separator,
    escape_newlines,
    normalize_phone,
    parse_absolute_url,
)


def test_escape_list_separator_escapes_backslash_before_semicolon() -> None:
    assert escape_list_separator("a;b\\c") == "a\\;b\\\\c"
    # an already escaped semicolon must not collapse
    assert escape_list_separator("x\\;y") == "x\\\\\\;y"


def test_escape_list_separator_falsy() -> None:
    assert escape_list_separator("") == ""
    assert escape_list_separator(None) == ""


def test_escape_newlines() -> None:
    assert escape_newlines("line1\nline2") == "line1\\nline2"
    assert escape_newlines(None) == ""


def test_normalize_phone_keeps_leading_plus_only() -> None:
    assert normalize_phone("+1 (555) 010-0000") == "+15550100000"
    assert normalize_phone("  +44 20 7946 0000") == "+442079460000"
    assert normalize_phone("(555) 010+22") == "55501022"


def test_normalize_phone_falsy_is_unchanged() -> None:
    assert normalize_phone("") == ""
    assert normalize_phone(None) is None


def test_ensure_scheme() -> None:
    assert ensure_scheme("example.com") == "https://example.com"
    assert ensure_scheme("  example.com/a ") == "https://example.com/a"
    assert ensure_scheme("http://example.com") == "http://example.com"
    assert ensure_scheme("HTTPS://Example.com") == "HTTPS://Example.com"
    assert ensure_scheme("ftp://files.example") == "ftp://files.example"


def test_parse_absolute_url_requires_host() -> None:
    assert parse_absolute_url("https://example.com/x?y=1") is not None
    assert parse_absolute_url("mailto:jane@example.com") is None
    assert parse_absolute_url("tel:+15550100") is None
    assert parse_absolute_url("example.com") is None
    assert parse_absolute_url("not a url at all") is None
    assert parse_absolute_url("http://example.com:notaport/") is None
    assert parse_absolute_url("") is None


def test_parse_absolute_url_ignores_surrounding_whitespace() -> None:
    parts = parse_absolute_url(" https://example.com/page \n")
    assert parts is not None
    assert parts.hostname == "example.com"
    assert parts.path == "/page"
    assert parse_absolute_url("https://example.com/page\r\n") is not None
    assert parse_absolute_url("https://example.com/a b") is None
    assert parse_absolute_url(" \n") is None
