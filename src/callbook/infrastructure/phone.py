"""Phone number helpers: E.164 normalization for storage, tel: URIs for dialing."""

import re

import phonenumbers


def _parse(raw: str, default_region: str | None) -> phonenumbers.PhoneNumber | None:
    try:
        parsed = phonenumbers.parse(raw, default_region)
    except phonenumbers.NumberParseException:
        return None
    if not phonenumbers.is_valid_number(parsed):
        return None
    return parsed


def normalize_phone(raw: str, default_region: str | None = None) -> str | None:
    """Parse and return E.164 form of the number, or None if invalid.

    Use default_region when the input has no leading + (e.g. "010 1234 5678"
    with default_region "KR"). If the number already includes a country code,
    default_region is ignored.
    """
    if not raw or not str(raw).strip():
        return None
    parsed = _parse(str(raw).strip(), default_region)
    if parsed is None:
        return None
    return phonenumbers.format_number(parsed, phonenumbers.PhoneNumberFormat.E164)


def tel_uri(raw: str, default_region: str | None = None) -> str | None:
    """Return an RFC 3966 tel: URI for the number, or None if nothing dialable is left.

    Numbers phonenumbers cannot validate (short codes, local extensions) are
    passed through with everything but digits, '+', '*' and '#' removed.
    """
    raw = (raw or "").strip()
    if not raw:
        return None
    parsed = _parse(raw, default_region)
    if parsed is not None:
        return phonenumbers.format_number(parsed, phonenumbers.PhoneNumberFormat.RFC3966)
    dialable = re.sub(r"[^0-9+*#]", "", raw)
    return f"tel:{dialable}" if dialable else None
