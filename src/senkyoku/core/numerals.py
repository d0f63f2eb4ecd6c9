"""District number normalization.

Turns whatever a member typed into the /senkyoku option ("3", "３区",
"十二", "一区") into a positive district index. Pure functions only.
"""

from __future__ import annotations

import re
import unicodedata

from senkyoku.models.constants import DISTRICT_SUFFIX

KANJI_DIGITS: dict[str, int] = {
    "〇": 0,
    "零": 0,
    "一": 1,
    "二": 2,
    "三": 3,
    "四": 4,
    "五": 5,
    "六": 6,
    "七": 7,
    "八": 8,
    "九": 9,
}

KANJI_UNITS: dict[str, int] = {
    "十": 10,
    "百": 100,
    "千": 1000,
}

# Longest accepted district number, leading zeros aside.
MAX_DIGITS = 4

_ASCII_DIGITS = re.compile(r"[0-9]+")
_KANJI_NUMERAL = re.compile("[" + "".join(KANJI_DIGITS) + "".join(KANJI_UNITS) + "]+")
_NO_UNIT = 10_000


def kanji_to_int(text: str) -> int | None:
    """Convert a kanji numeral to an integer.

    Handles both unit notation (``十二`` = 12, ``二百五`` = 205, ``百〇一`` =
    101) and positional digit strings (``一二`` = 12, ``二〇`` = 20). In unit
    notation ``〇`` is only allowed as a placeholder after a unit. Returns None
    for malformed sequences such as ``十十`` or ``一千百百``, and for
    positional strings longer than MAX_DIGITS significant digits.
    """
    if not text or not _KANJI_NUMERAL.fullmatch(text):
        return None

    if not any(ch in KANJI_UNITS for ch in text):
        digits = [KANJI_DIGITS[ch] for ch in text]
        while len(digits) > 1 and digits[0] == 0:
            digits.pop(0)
        if len(digits) > MAX_DIGITS:
            return None
        value = 0
        for digit in digits:
            value = value * 10 + digit
        return value

    total = 0
    current: int | None = None
    last_unit = _NO_UNIT
    for ch in text:
        if ch in KANJI_DIGITS:
            digit = KANJI_DIGITS[ch]
            if digit == 0:
                if current is not None or last_unit == _NO_UNIT:
                    return None
                continue
            if current is not None:
                return None
            current = digit
        else:
            unit = KANJI_UNITS[ch]
            if unit >= last_unit:
                return None
            total += (1 if current is None else current) * unit
            current = None
            last_unit = unit
    if current is not None:
        total += current
    return total


def normalize_number(raw: str | None) -> int | None:
    """Extract a district index from free-text input.

    Accepts ASCII or full-width digits and kanji numerals, each optionally
    followed by a single ``区``. Returns None for empty input, anything
    non-numeric, zero, and numbers with more than MAX_DIGITS significant
    digits. Never raises.
    """
    if not raw:
        return None
    text = unicodedata.normalize("NFKC", raw).strip()
    if text.endswith(DISTRICT_SUFFIX):
        text = text[: -len(DISTRICT_SUFFIX)].rstrip()
    if not text:
        return None

    if _ASCII_DIGITS.fullmatch(text):
        significant = text.lstrip("0")
        if len(significant) > MAX_DIGITS:
            return None
        value: int | None = int(significant) if significant else 0
    else:
        value = kanji_to_int(text)

    if value is None or value < 1:
        return None
    return value
