"""Phone number normalization to E.164 for imported contacts and SMS recipients."""

import phonenumbers


def normalize_phone(raw: str, default_region: str | None = None) -> str | None:
    """Parse and return E.164 form of the number, or None if invalid.

    Use default_region when the input has no leading + (e.g. "020 7946 0018"
    with default_region "GB"). If the number already includes a country code,
    default_region is ignored.
    """
    if not raw or not str(raw).strip():
        return None
    raw = str(raw).strip()
    try:
        parsed = phonenumbers.parse(raw, default_region)
    except phonenumbers.NumberParseException:
        return None
    if not phonenumbers.is_valid_number(parsed):
        return None
    return phonenumbers.format_number(parsed, phonenumbers.PhoneNumberFormat.E164)


def phone_normalizer(default_region: str | None = None):
    """Bind default_region, for FriendService(normalize_phone=...)."""

    def _normalize(raw: str) -> str | None:
        return normalize_phone(raw, default_region=default_region)

    return _normalize
