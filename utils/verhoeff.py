"""
Verhoeff check digit calculation.

The Verhoeff scheme detects every single-digit substitution and every
adjacent transposition. It works over the dihedral group D5: each digit is
permuted according to its position (counted from the right) and folded into
a running state with the group multiplication table. The tables are fixed by
the published algorithm and kept here as static data.
"""

from typing import Union


# Multiplication table of the dihedral group D5
D = (
    (0, 1, 2, 3, 4, 5, 6, 7, 8, 9),
    (1, 2, 3, 4, 0, 6, 7, 8, 9, 5),
    (2, 3, 4, 0, 1, 7, 8, 9, 5, 6),
    (3, 4, 0, 1, 2, 8, 9, 5, 6, 7),
    (4, 0, 1, 2, 3, 9, 5, 6, 7, 8),
    (5, 9, 8, 7, 6, 0, 4, 3, 2, 1),
    (6, 5, 9, 8, 7, 1, 0, 4, 3, 2),
    (7, 6, 5, 9, 8, 2, 1, 0, 4, 3),
    (8, 7, 6, 5, 9, 3, 2, 1, 0, 4),
    (9, 8, 7, 6, 5, 4, 3, 2, 1, 0),
)

# Position-dependent permutations; row i is applied to the digit at position i mod 8
P = (
    (0, 1, 2, 3, 4, 5, 6, 7, 8, 9),
    (1, 5, 7, 6, 2, 8, 3, 0, 9, 4),
    (5, 8, 0, 3, 7, 9, 6, 1, 4, 2),
    (8, 9, 1, 6, 0, 4, 3, 5, 2, 7),
    (9, 4, 5, 3, 1, 2, 6, 8, 7, 0),
    (4, 2, 8, 6, 5, 7, 3, 9, 0, 1),
    (2, 7, 9, 3, 8, 0, 6, 4, 1, 5),
    (7, 0, 4, 6, 9, 1, 3, 2, 5, 8),
)

INV = (0, 4, 3, 2, 1, 5, 6, 7, 8, 9)


def _digits_from_right(digits: str):
    if not digits or not digits.isascii() or not digits.isdigit():
        raise ValueError(f"Expected a non-empty string of decimal digits, got {digits!r}")
    return (ord(ch) - 48 for ch in reversed(digits))


def compute_check_digit(digits: str) -> int:
    """
    Compute the Verhoeff check digit for a string of decimal digits.

    Args:
        digits: Digits the check digit will be appended to (no sign or separators)

    Returns:
        int: Check digit in the range 0-9

    Raises:
        ValueError: If *digits* is empty or contains non-digit characters

    Example:
        >>> compute_check_digit("236")
        3
    """
    c = 0
    # The check digit itself will occupy position 0, so payload digits start at 1
    for i, digit in enumerate(_digits_from_right(digits), start=1):
        c = D[c][P[i % 8][digit]]
    return INV[c]


def check_digit_char(digits: str) -> str:
    """Check digit of *digits* as a single character, ready to append."""
    return str(compute_check_digit(digits))


def is_valid(number: Union[str, int]) -> bool:
    """
    Validate a number whose last digit is a Verhoeff check digit.

    Returns False (rather than raising) for negative numbers, non-digit strings
    and strings too short to carry a payload.
    """
    text = str(number)
    if len(text) < 2 or not text.isascii() or not text.isdigit():
        return False
    c = 0
    for i, digit in enumerate(_digits_from_right(text)):
        c = D[c][P[i % 8][digit]]
    return c == 0
