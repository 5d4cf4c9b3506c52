import pytest

from idservice.core.partitions import (
    PARTITIONS,
    POSTCOORDINATED_EXPRESSION_PARTITION_ID,
    ComponentKind,
    classify,
    is_recognized,
)


@pytest.mark.parametrize(
    "partition_id, kind, field",
    [
        ("00", ComponentKind.CONCEPT, "conceptId"),
        ("10", ComponentKind.CONCEPT, "conceptId"),
        ("01", ComponentKind.DESCRIPTION, "descriptionId"),
        ("11", ComponentKind.DESCRIPTION, "descriptionId"),
        ("02", ComponentKind.RELATIONSHIP, "relationshipId"),
        ("12", ComponentKind.RELATIONSHIP, "relationshipId"),
        ("16", ComponentKind.REFERENCE_SET_MEMBER, "referencedComponentId"),
    ],
)
def test_every_partition_maps_to_one_kind_and_field(partition_id, kind, field):
    first = classify(partition_id)
    assert first.kind is kind
    assert first.id_field == field
    # Same code always routes the same way
    assert classify(partition_id) == first


def test_partition_table_is_closed_and_immutable():
    assert set(PARTITIONS) == {"00", "10", "01", "11", "02", "12", "16"}
    assert POSTCOORDINATED_EXPRESSION_PARTITION_ID == "16"
    with pytest.raises(TypeError):
        PARTITIONS["99"] = PARTITIONS["00"]  # type: ignore[index]


@pytest.mark.parametrize("partition_id", ["99", "03", "", "0", "000"])
def test_unknown_partitions_are_not_classified(partition_id):
    assert classify(partition_id) is None
    assert not is_recognized(partition_id)
