"""
Phone/WhatsApp validation: require a country code (e.g. +44, +234) so wa.me links work.
E.164: + followed by digits only; spaces/dashes are allowed in input and stripped for validation.
"""
import re

PHONE_COUNTRY_CODE_HINT = (
    "Include country code (e.g. +44 UK, +234 Nigeria) so we can reach you on WhatsApp."
)

# Min/max digits for E.164 (country code + subscriber number)
MIN_DIGITS = 10
MAX_DIGITS = 15

_NON_DIGITS = re.compile(r"\D")


def phone_validation_error(value: str | None) -> str | None:
    """Return an error message if invalid, or None if valid or empty (no phone)."""
    trimmed = value.strip() if isinstance(value, str) else ""
    if not trimmed:
        return None
    if not trimmed.startswith("+"):
        return "Phone must start with a country code (e.g. +44 or +234)."
    digits = _NON_DIGITS.sub("", trimmed)
    if len(digits) < MIN_DIGITS:
        return "Phone number is too short. Include full country code and number."
    if len(digits) > MAX_DIGITS:
        return "Phone number is too long."
    return None


def is_valid_phone_with_country_code(value: str | None) -> bool:
    return phone_validation_error(value) is None


def normalize_phone_for_whatsapp(value: str | None) -> str:
    """Digits only (no +), for wa.me links. Use after validation."""
    if not value:
        return ""
    return _NON_DIGITS.sub("", value)


def whatsapp_link(value: str | None) -> str | None:
    """wa.me link for a valid phone, else None."""
    if not value or not value.strip() or not is_valid_phone_with_country_code(value):
        return None
    return f"https://wa.me/{normalize_phone_for_whatsapp(value)}"
