"""
------------------------------------------------------------------------------
Project:        HubSlip
File:           hubslip/utils/reference.py
Version:        1.0.0
Producer:       thorsten.schnebeck@gmx.net
Generator:      Antigravity
Description:    MOD-11 reference numbers ("poziv na broj") as used on
                Croatian HUB-3 payment slips.
------------------------------------------------------------------------------
"""

from hubslip.errors import InvalidReferenceSeed

BASE_LENGTH = 10
MAX_SEED = 10 ** BASE_LENGTH - 1


def mod11_check_digit(number: str) -> int:
    """
    Calculates the MOD-11 check digit of a digit string.

    Digits are weighted right-to-left with the cycle 2,3,4,5,6,7,2,3,...
    A remainder below 2 gives 0, otherwise the digit is 11 - remainder.

    Args:
        number: String of ASCII digits.

    Returns:
        The check digit (0-9).
    """
    total = 0
    weight = 2
    for char in reversed(number):
        total += int(char) * weight
        weight += 1
        if weight > 7:
            weight = 2

    remainder = total % 11
    if remainder < 2:
        return 0
    return 11 - remainder


def generate_reference(seed: int) -> str:
    """
    Builds an 11 digit reference: the seed zero-padded to 10 digits
    followed by its MOD-11 check digit.

    Raises:
        InvalidReferenceSeed: If seed is not an int in [0, MAX_SEED].
    """
    if isinstance(seed, bool) or not isinstance(seed, int):
        raise InvalidReferenceSeed(f"Reference seed must be an integer, got {seed!r}")
    if not 0 <= seed <= MAX_SEED:
        raise InvalidReferenceSeed(f"Reference seed out of range: {seed}")

    base = f"{seed:0{BASE_LENGTH}d}"
    return f"{base}{mod11_check_digit(base)}"


def is_valid_reference(reference: str) -> bool:
    """True if the last digit is the MOD-11 check digit of the rest."""
    if not reference or len(reference) < 2 or not reference.isascii() or not reference.isdigit():
        return False
    return mod11_check_digit(reference[:-1]) == int(reference[-1])
