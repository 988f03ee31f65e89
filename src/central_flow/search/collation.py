"""Locale-style title collation.

Titles are compared on three levels, like a Unicode collation: base
letters first (case and accents ignored), then accents, then case with
lowercase first.  The raw string breaks any remaining tie so the order
is total: ``"apple" < "Apple" < "Äpple" < "banana" < "Zebra"``, where a
byte comparison would put ``"Zebra"`` before ``"apple"``.
"""

from __future__ import annotations

import unicodedata

CollationKey = tuple[str, tuple[str, ...], tuple[int, ...], str]


def collation_key(text: str) -> CollationKey:
    primary: list[str] = []
    accents: list[str] = []
    case: list[int] = []
    for char in unicodedata.normalize("NFKD", text):
        if unicodedata.combining(char):
            if accents:
                accents[-1] += char
            continue
        primary.append(char.casefold())
        accents.append("")
        case.append(1 if char.isupper() else 0)
    return "".join(primary), tuple(accents), tuple(case), text


def compare_titles(left: str, right: str) -> int:
    """Three-way comparison: negative, zero or positive."""
    left_key, right_key = collation_key(left), collation_key(right)
    return (left_key > right_key) - (left_key < right_key)
