"""
------------------------------------------------------------------------------
Project:        HubSlip
File:           hubslip/errors.py
Version:        1.0.0
Producer:       thorsten.schnebeck@gmx.net
Generator:      Antigravity
Description:    Error taxonomy for payment slip generation. Structural
                problems raise, template-authoring problems are recorded as
                warnings and recovered locally.
------------------------------------------------------------------------------
"""

from dataclasses import dataclass
from enum import Enum


class HubSlipError(Exception):
    """Base class for all fatal payment slip errors."""


class InvalidAmount(HubSlipError, ValueError):
    """Amount is non-positive, not finite, too large or too precise."""


class MissingOrganizationData(HubSlipError):
    """Recipient name or IBAN is missing."""


class UnsupportedCharacters(HubSlipError):
    """Payload contains characters the barcode charset cannot carry."""


class InvalidReferenceSeed(HubSlipError, ValueError):
    """Reference seed is not an integer in [0, 9_999_999_999]."""


class WarningKind(str, Enum):
    """Recoverable template anomalies."""
    UNRESOLVED_PLACEHOLDER = "UNRESOLVED_PLACEHOLDER"
    NON_NUMERIC_REFERENCE = "NON_NUMERIC_REFERENCE"


@dataclass(frozen=True)
class ResolutionWarning:
    kind: WarningKind
    message: str
    token: str = ""

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.message}"
