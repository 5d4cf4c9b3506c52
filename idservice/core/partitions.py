"""
Partition code classification.

A two-character partition code says which kind of component an identifier
belongs to and whether it was issued in the international (``0x``) or a
national (``1x``) namespace. The table is closed and built once at import.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional


POSTCOORDINATED_EXPRESSION_PARTITION_ID = "16"


class ComponentKind(str, Enum):
    CONCEPT = "concept"
    DESCRIPTION = "description"
    RELATIONSHIP = "relationship"
    REFERENCE_SET_MEMBER = "member"


@dataclass(frozen=True, slots=True)
class PartitionClassification:
    """Component kind plus the stored field holding its identifier."""

    kind: ComponentKind
    id_field: str


_CONCEPT = PartitionClassification(ComponentKind.CONCEPT, "conceptId")
_DESCRIPTION = PartitionClassification(ComponentKind.DESCRIPTION, "descriptionId")
_RELATIONSHIP = PartitionClassification(ComponentKind.RELATIONSHIP, "relationshipId")
# Expression ids are checked against the members that reference them
_EXPRESSION = PartitionClassification(
    ComponentKind.REFERENCE_SET_MEMBER, "referencedComponentId"
)

PARTITIONS: Mapping[str, PartitionClassification] = MappingProxyType(
    {
        "00": _CONCEPT,
        "10": _CONCEPT,
        "01": _DESCRIPTION,
        "11": _DESCRIPTION,
        "02": _RELATIONSHIP,
        "12": _RELATIONSHIP,
        POSTCOORDINATED_EXPRESSION_PARTITION_ID: _EXPRESSION,
    }
)


def classify(partition_id: str) -> Optional[PartitionClassification]:
    """Return the classification for *partition_id*, or None if unrecognized."""
    return PARTITIONS.get(partition_id)


def is_recognized(partition_id: str) -> bool:
    return partition_id in PARTITIONS
