"""
------------------------------------------------------------------------------
Project:        HubSlip
File:           hubslip/utils/text.py
Version:        1.0.0
Producer:       thorsten.schnebeck@gmx.net
Generator:      Antigravity
Description:    Text helpers for HUB-3 payload fields: Croatian diacritic
                folding and empty-safe joining of address parts.
------------------------------------------------------------------------------
"""

import re
from typing import Optional

# Croatian letters outside 7-bit ASCII and their closest ASCII letter
_CROATIAN_MAP = str.maketrans({
    "č": "c", "Č": "C",
    "ć": "c", "Ć": "C",
    "ž": "z", "Ž": "Z",
    "š": "s", "Š": "S",
    "đ": "d", "Đ": "D",
})

CROATIAN_DIACRITICS = frozenset("čČćĆžŽšŠđĐ")

_LINE_BREAKS = re.compile(r"[\r\n]+")


def normalize(text: Optional[str]) -> str:
    """
    Folds Croatian diacritics to ASCII (č -> c, Đ -> D, ...).
    Every other character is left untouched. None yields an empty string.
    """
    if not text:
        return ""
    return text.translate(_CROATIAN_MAP)


def single_line(text: Optional[str]) -> str:
    """Collapses line breaks to single spaces and strips the result."""
    if not text:
        return ""
    return _LINE_BREAKS.sub(" ", text).strip()


def join_nonempty(*parts: Optional[str], sep: str = " ") -> str:
    """
    Joins the stripped, non-blank parts with 'sep'.
    The separator is omitted whenever a neighbour is missing.
    """
    return sep.join(p.strip() for p in parts if p and p.strip())
