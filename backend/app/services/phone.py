"""Phone number normalization shared by duplicate checks, lead validation and search."""

import re

_NON_DIGITS = re.compile(r"\D")
_PHONE_SHAPE = re.compile(r"^[\d\s()+\-]+$")

COUNTRY_CODE = "20"


def normalize_phone_number(raw: str | None) -> str:
    """Reduce a phone number to its local Egyptian digits.

    Non-digits are stripped, then a leading ``20`` country code is dropped and
    finally a single leading trunk ``0``. The result may be empty.
    """
    if not raw:
        return ""
    digits = _NON_DIGITS.sub("", raw)
    if digits.startswith(COUNTRY_CODE):
        digits = digits[len(COUNTRY_CODE):]
    if digits.startswith("0"):
        digits = digits[1:]
    return digits


def is_phone_shaped(raw: str | None) -> bool:
    return bool(raw) and bool(_PHONE_SHAPE.match(raw.strip()))
