"""
------------------------------------------------------------------------------
Project:        HubSlip
File:           hubslip/resolver.py
Version:        1.0.0
Producer:       thorsten.schnebeck@gmx.net
Generator:      Antigravity
Description:    Expands {{contact_attributes.X}}, {{underaged_attributes.X}}
                and {{custom_text.Y}} placeholders of payment templates
                against a contact and an optional underage dependent.
                Malformed templates never fail: they resolve to a usable
                value and the anomaly is reported as a warning.
------------------------------------------------------------------------------
"""

import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

from hubslip.errors import ResolutionWarning, WarningKind
from hubslip.logger import get_logger
from hubslip.models.placeholders import (
    LEGACY_CONTACT_ID,
    ContactAttribute,
    CustomText,
    LegacyContactId,
    Literal,
    Segment,
    UnderagedAttribute,
    UnknownPlaceholder,
    is_placeholder_form,
    parse_token,
    tokenize,
)
from hubslip.models.records import Contact, UnderagedMember

logger = get_logger("resolver")

_DIGITS = re.compile(r"[0-9]*")

FIELD_DESCRIPTION = "description"
FIELD_REFERENCE = "reference"


@dataclass(frozen=True)
class Resolution:
    """Resolved text plus the warnings raised while resolving it."""
    value: str
    warnings: Tuple[ResolutionWarning, ...] = ()


class _Collector:
    """Accumulates warnings and mirrors them to the log."""

    def __init__(self) -> None:
        self.warnings: List[ResolutionWarning] = []

    def warn(self, kind: WarningKind, message: str, token: str = "") -> None:
        logger.warning(message)
        self.warnings.append(ResolutionWarning(kind=kind, message=message, token=token))

    def result(self, value: str) -> Resolution:
        return Resolution(value=value, warnings=tuple(self.warnings))


def _segment_text(
    segment: Segment,
    primary: Optional[Contact],
    dependent: Optional[UnderagedMember],
    collector: _Collector,
) -> str:
    if isinstance(segment, Literal):
        return segment.text
    if isinstance(segment, CustomText):
        return segment.value
    if isinstance(segment, ContactAttribute):
        if segment.name not in Contact.TEMPLATE_ATTRIBUTES:
            collector.warn(
                WarningKind.UNRESOLVED_PLACEHOLDER,
                f"Unknown contact attribute '{segment.name}', resolving to empty string",
                token=f"contact_attributes.{segment.name}",
            )
            return ""
        return primary.attribute(segment.name) if primary is not None else ""
    if isinstance(segment, UnderagedAttribute):
        if segment.name not in UnderagedMember.TEMPLATE_ATTRIBUTES:
            collector.warn(
                WarningKind.UNRESOLVED_PLACEHOLDER,
                f"Unknown underaged attribute '{segment.name}', resolving to empty string",
                token=f"underaged_attributes.{segment.name}",
            )
            return ""
        # No dependent is a normal situation, not an authoring error
        return dependent.attribute(segment.name) if dependent is not None else ""
    if isinstance(segment, LegacyContactId):
        # Only reference templates know the legacy token
        return LEGACY_CONTACT_ID
    if isinstance(segment, UnknownPlaceholder):
        collector.warn(
            WarningKind.UNRESOLVED_PLACEHOLDER,
            f"Unknown placeholder '{{{{{segment.raw}}}}}', resolving to empty string",
            token=segment.raw,
        )
        return ""
    raise TypeError(f"Unhandled template segment: {segment!r}")


def resolve_description(
    template: Optional[str],
    primary: Optional[Contact],
    dependent: Optional[UnderagedMember] = None,
) -> Resolution:
    """
    Resolves a description template token by token.

    Tokens are resolved independently and rejoined with single spaces;
    tokens resolving to an empty string are dropped.
    """
    collector = _Collector()
    if not template or not template.strip():
        return collector.result("")

    parts = []
    for token in tokenize(template):
        text = "".join(_segment_text(seg, primary, dependent, collector) for seg in token)
        if text.strip():
            parts.append(text.strip())
    return collector.result(" ".join(parts))


def _fallback_id(primary: Optional[Contact]) -> str:
    if primary is None or primary.id is None:
        return ""
    return str(primary.id)


def resolve_reference(
    template: Optional[str],
    primary: Optional[Contact],
    dependent: Optional[UnderagedMember] = None,
) -> Resolution:
    """
    Resolves a reference ("poziv na broj") template.

    Accepted forms:
        - empty: resolves to ''
        - '{{contact_attributes.pin}}' / '{{underaged_attributes.pin}}'
        - a static number, optionally containing the legacy '{contact_id}'

    The result always consists of digits only. Anything else falls back
    to the contact id and is reported as NON_NUMERIC_REFERENCE.
    """
    collector = _Collector()
    if not template or not template.strip():
        return collector.result("")

    text = template.strip()
    if is_placeholder_form(text):
        segments = parse_token(text)
        segment = segments[0] if len(segments) == 1 else None
        if segment == ContactAttribute("pin"):
            value = (primary.pin if primary else None) or ""
        elif segment == UnderagedAttribute("pin"):
            value = (dependent.pin if dependent else None) or ""
        else:
            collector.warn(
                WarningKind.UNRESOLVED_PLACEHOLDER,
                f"Unknown reference placeholder '{text}', returning empty string",
                token=text,
            )
            value = ""
    else:
        value = text.replace(LEGACY_CONTACT_ID, _fallback_id(primary))

    if not _DIGITS.fullmatch(value):
        fallback = _fallback_id(primary)
        collector.warn(
            WarningKind.NON_NUMERIC_REFERENCE,
            f"Reference template '{text}' resolved to non-numeric '{value}'. "
            f"Using contact ID '{fallback}' as fallback.",
            token=text,
        )
        value = fallback

    return collector.result(value)


def resolve(
    template: Optional[str],
    primary: Optional[Contact],
    dependent: Optional[UnderagedMember] = None,
    field: str = FIELD_DESCRIPTION,
) -> str:
    """Resolves a template for the given payload field and returns only the text."""
    if field == FIELD_REFERENCE:
        return resolve_reference(template, primary, dependent).value
    if field == FIELD_DESCRIPTION:
        return resolve_description(template, primary, dependent).value
    raise ValueError(f"Unknown template field: {field}")


def template_uses_dependent(template: Optional[str]) -> bool:
    """True if the template references any {{underaged_attributes.*}} value."""
    return any(
        isinstance(seg, UnderagedAttribute)
        for token in tokenize(template or "")
        for seg in token
    )
