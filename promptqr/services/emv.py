from __future__ import annotations

CRC_TAG = "63"
CRC_PLACEHOLDER = CRC_TAG + "04"
MAX_VALUE_LENGTH = 99


class FieldLengthError(ValueError):
    pass


def format_length(length: int) -> str:
    if length < 0 or length > MAX_VALUE_LENGTH:
        raise FieldLengthError(f"TLV value length {length} does not fit in two digits")
    return f"{length:02d}"


def format_tag(tag: str, value: str) -> str:
    return tag + format_length(len(value)) + value


def parse_tlv(data: str) -> dict[str, str]:
    """Read top-level TLV fields into a ``{tag: value}`` mapping.

    Parsing stops at the first header whose tag or length is not numeric, or
    whose value runs past the end of ``data``.
    """
    fields: dict[str, str] = {}
    pos = 0
    while pos + 4 <= len(data):
        tag = data[pos:pos + 2]
        length_text = data[pos + 2:pos + 4]
        if not (tag + length_text).isdigit():
            break
        value_end = pos + 4 + int(length_text)
        if value_end > len(data):
            break
        fields[tag] = data[pos + 4:value_end]
        pos = value_end
    return fields


def crc16_ccitt(data: str) -> str:
    """CRC-16/CCITT-FALSE of ``data`` as four uppercase hex digits.

    Polynomial 0x1021, initial value 0xFFFF, MSB first, no reflection and no
    final XOR. Each character's code point is XORed into the high byte as a
    single byte, so only code points up to 0xFF checksum correctly. EMV
    payloads stay within ASCII and other generators behave the same way.
    """
    crc = 0xFFFF
    poly = 0x1021
    for char in data:
        crc ^= ord(char) << 8
        for _ in range(8):
            if crc & 0x8000:
                crc = (crc << 1) ^ poly
            else:
                crc <<= 1
            crc &= 0xFFFF
    return f"{crc:04X}"


def verify_crc(payload: str) -> bool:
    if len(payload) < 8 or payload[-8:-4] != CRC_PLACEHOLDER:
        return False
    return crc16_ccitt(payload[:-4]) == payload[-4:].upper()
