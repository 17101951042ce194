"""Phone normalization used to match returning visitors.

"+243 812 345 678", "0812345678" and "812-345-678" all normalize to "812345678".
"""
import re

MATCH_DIGITS = 9

_NON_DIGIT = re.compile(r"\D")


def digits_only(value: str | None) -> str:
    return _NON_DIGIT.sub("", value or "")


def normalize_phone(raw: str | None, country_code: str | None = None) -> str | None:
    """Canonical 9-digit suffix, or None when too short to match safely."""
    digits = digits_only(raw)
    code = digits_only(country_code)
    if code and digits.startswith(code):
        digits = digits[len(code):]
    if digits.startswith("0"):
        digits = digits[1:]
    if len(digits) < MATCH_DIGITS:
        return None
    return digits[-MATCH_DIGITS:]


def phones_match(a: str | None, b: str | None, country_code: str | None = None) -> bool:
    na = normalize_phone(a, country_code)
    return na is not None and na == normalize_phone(b, country_code)
