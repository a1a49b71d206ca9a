"""
------------------------------------------------------------------------------
Project:        HubSlip
File:           hubslip/models/placeholders.py
Version:        1.0.0
Producer:       thorsten.schnebeck@gmx.net
Generator:      Antigravity
Description:    Parsed form of payment template text. A template is split
                into whitespace separated tokens, each token into segments
                (literal text or a typed placeholder).
------------------------------------------------------------------------------
"""

import re
from dataclasses import dataclass
from typing import List, Union

CONTACT_PREFIX = "contact_attributes."
UNDERAGED_PREFIX = "underaged_attributes."
CUSTOM_TEXT_PREFIX = "custom_text."
LEGACY_CONTACT_ID = "{contact_id}"

# {{...}} placeholder or the legacy single-brace {contact_id}
SEGMENT_PATTERN = re.compile(r"\{\{([^}]*)\}\}|\{contact_id\}")

# A token is a run of placeholders and non-space text
TOKEN_PATTERN = re.compile(r"(?:\{\{[^}]*\}\}|[^\s{]+|\{)+")


@dataclass(frozen=True)
class Literal:
    text: str


@dataclass(frozen=True)
class ContactAttribute:
    name: str


@dataclass(frozen=True)
class UnderagedAttribute:
    name: str


@dataclass(frozen=True)
class CustomText:
    value: str


@dataclass(frozen=True)
class LegacyContactId:
    pass


@dataclass(frozen=True)
class UnknownPlaceholder:
    raw: str


Segment = Union[Literal, ContactAttribute, UnderagedAttribute, CustomText,
                LegacyContactId, UnknownPlaceholder]


def parse_placeholder(body: str) -> Segment:
    """Classifies the text between '{{' and '}}'."""
    key = body.strip()
    if key.startswith(CONTACT_PREFIX):
        return ContactAttribute(key[len(CONTACT_PREFIX):].strip())
    if key.startswith(UNDERAGED_PREFIX):
        return UnderagedAttribute(key[len(UNDERAGED_PREFIX):].strip())
    if body.lstrip().startswith(CUSTOM_TEXT_PREFIX):
        # custom text keeps its inner spacing
        return CustomText(body.lstrip()[len(CUSTOM_TEXT_PREFIX):])
    return UnknownPlaceholder(body)


def parse_token(token: str) -> List[Segment]:
    """Splits one token into literal and placeholder segments."""
    segments: List[Segment] = []
    pos = 0
    for match in SEGMENT_PATTERN.finditer(token):
        if match.start() > pos:
            segments.append(Literal(token[pos:match.start()]))
        if match.group(0) == LEGACY_CONTACT_ID:
            segments.append(LegacyContactId())
        else:
            segments.append(parse_placeholder(match.group(1)))
        pos = match.end()
    if pos < len(token):
        segments.append(Literal(token[pos:]))
    return segments


def tokenize(template: str) -> List[List[Segment]]:
    """
    Parses a template into tokens of segments.
    Whitespace inside '{{...}}' never splits a token.
    """
    if not template:
        return []
    return [parse_token(m.group(0)) for m in TOKEN_PATTERN.finditer(template)]


def is_placeholder_form(template: str) -> bool:
    """True if the stripped template starts with '{{' and ends with '}}'."""
    text = (template or "").strip()
    return text.startswith("{{") and text.endswith("}}")
