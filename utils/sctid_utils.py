"""
Helpers for composing and decomposing component identifiers (SCTIDs).

Layout of an identifier, read left to right:

    <item id><namespace><partition (2 digits)><check digit>

The namespace segment is empty for the international namespace (0), which
gives the "short format". National identifiers carry a 7-digit namespace and
use a partition code starting with "1" ("long format").
"""

from typing import Dict, Union

from idservice.core.exceptions import FormatError
from utils.verhoeff import check_digit_char, is_valid

PARTITION_LENGTH = 2
NAMESPACE_LENGTH = 7
MAX_SCTID = 2**63 - 1


def namespace_segment(namespace_id: int) -> str:
    """Render a namespace id as it appears inside an identifier ("" for 0)."""
    return "" if namespace_id == 0 else str(namespace_id)


def synthesize(item_id: str, namespace_id: int, partition_id: str) -> int:
    """
    Build a complete identifier from its parts.

    Args:
        item_id: Fixed-length item identifier fragment
        namespace_id: Non-negative namespace id; 0 renders as an empty segment
        partition_id: Two-character partition code

    Returns:
        int: The identifier including its trailing Verhoeff check digit

    Raises:
        FormatError: If the composed string is not all digits or exceeds the
            signed 64-bit range
    """
    without_check = f"{item_id}{namespace_segment(namespace_id)}{partition_id}"
    if not without_check.isascii() or not without_check.isdigit():
        raise FormatError(
            f"Identifier digits are not numeric: {without_check!r}", digits=without_check
        )
    digits = without_check + check_digit_char(without_check)
    value = int(digits)
    if value > MAX_SCTID:
        raise FormatError(f"Identifier {digits} exceeds the 64-bit range", digits=digits)
    return value


def _digits(sctid: Union[int, str]) -> str:
    text = str(sctid)
    if len(text) < PARTITION_LENGTH + 1 + 1 or not text.isascii() or not text.isdigit():
        raise FormatError(f"Not an identifier: {text!r}", digits=text)
    return text


def partition_of(sctid: Union[int, str]) -> str:
    text = _digits(sctid)
    return text[-3:-1]


def namespace_of(sctid: Union[int, str]) -> int:
    """Namespace id of *sctid*; short-format identifiers belong to namespace 0."""
    text = _digits(sctid)
    if not partition_of(text).startswith("1"):
        return 0
    if len(text) < NAMESPACE_LENGTH + PARTITION_LENGTH + 2:
        raise FormatError(f"Long-format identifier is too short: {text}", digits=text)
    return int(text[-(NAMESPACE_LENGTH + 3) : -3])


def describe(sctid: Union[int, str]) -> Dict[str, object]:
    """Split an identifier into item id, namespace and partition, and check it."""
    text = _digits(sctid)
    namespace_id = namespace_of(text)
    long_format = partition_of(text).startswith("1")
    tail = (NAMESPACE_LENGTH if long_format else 0) + PARTITION_LENGTH + 1
    return {
        "sctid": text,
        "item_id": text[:-tail],
        "namespace_id": namespace_id,
        "partition_id": partition_of(text),
        "check_digit": text[-1],
        "valid": is_valid(text),
    }
