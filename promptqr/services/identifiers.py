from __future__ import annotations

import re
from enum import Enum

_SEPARATORS = re.compile(r"[\s-]")
_WHITESPACE = re.compile(r"\s+")
_PHONE_PATTERN = re.compile(r"0[0-9]{9}")
_NATIONAL_ID_PATTERN = re.compile(r"[0-9]{13}")

MOBILE_PREFIXES = ("08", "09", "06")
COUNTRY_CODE_PREFIX = "0066"


class IdentifierKind(str, Enum):
    PHONE = "phone"
    NATIONAL_ID = "national_id"
    INVALID = "invalid"


def clean_identifier(raw: str) -> str:
    return _SEPARATORS.sub("", raw)


def is_valid_phone_number(raw: str) -> bool:
    phone = clean_identifier(raw)
    if not _PHONE_PATTERN.fullmatch(phone):
        return False
    return phone.startswith(MOBILE_PREFIXES)


def is_valid_national_id(raw: str) -> bool:
    """Check a Thai national ID: 13 digits, the last one a mod-11 check digit."""
    if not raw or not _NATIONAL_ID_PATTERN.fullmatch(raw):
        return False
    digits = [int(char) for char in raw]
    total = sum(digit * (13 - index) for index, digit in enumerate(digits[:12]))
    checksum = (11 - total % 11) % 10
    return checksum == digits[12]


def classify_identifier(raw: str) -> IdentifierKind:
    value = _WHITESPACE.sub("", raw or "")
    if not value:
        return IdentifierKind.INVALID
    if is_valid_phone_number(value):
        return IdentifierKind.PHONE
    if is_valid_national_id(value):
        return IdentifierKind.NATIONAL_ID
    return IdentifierKind.INVALID


def format_proxy_value(raw: str) -> str:
    """Map an identifier to the value carried under merchant sub-tag 01.

    Mobile numbers lose their trunk ``0`` and gain the ``0066`` country code
    (``0812345678`` becomes ``0066812345678``). Anything else is returned
    cleaned but otherwise untouched; callers validate beforehand.
    """
    value = clean_identifier(raw)
    if is_valid_phone_number(raw):
        return COUNTRY_CODE_PREFIX + value[1:]
    return value


class InvalidIdentifierError(ValueError):
    pass


def require_identifier(raw: str) -> tuple[str, IdentifierKind]:
    """Return the whitespace-free identifier and its kind, or raise."""
    value = _WHITESPACE.sub("", raw or "")
    kind = classify_identifier(value)
    if kind is IdentifierKind.INVALID:
        raise InvalidIdentifierError(f"{raw!r} is neither a Thai mobile number nor a national ID")
    return value, kind
