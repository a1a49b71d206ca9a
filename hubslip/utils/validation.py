"""
------------------------------------------------------------------------------
Project:        HubSlip
File:           hubslip/utils/validation.py
Version:        1.0.0
Producer:       thorsten.schnebeck@gmx.net
Generator:      Antigravity
Description:    Utility functions for validating recipient bank data.
------------------------------------------------------------------------------
"""

import re

def clean_iban(iban: str) -> str:
    """Removes all whitespace and upper-cases the IBAN."""
    if not iban:
        return ""
    return "".join(iban.split()).upper()

def validate_iban(iban: str) -> bool:
    """
    Validates an IBAN according to ISO 13616.

    Args:
        iban: The IBAN string to validate.

    Returns:
        True if the IBAN is valid, False otherwise.
    """
    if not iban:
        return False

    iban = clean_iban(iban)
    if not re.match(r'^[A-Z]{2}[0-9]{2}[A-Z0-9]+$', iban):
        return False

    # Check length (minimum 5, maximum 34)
    if not (5 <= len(iban) <= 34):
        return False

    # Reassemble: Move first 4 chars to the end
    rearranged = iban[4:] + iban[:4]

    # Replace letters with digits (A=10, B=11, ..., Z=35)
    numeric_iban = "".join(
        char if char.isdigit() else str(ord(char) - 55)
        for char in rearranged
    )

    # Check modulo 97
    return int(numeric_iban) % 97 == 1
