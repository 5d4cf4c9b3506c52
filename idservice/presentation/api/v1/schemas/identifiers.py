from typing import List

from pydantic import BaseModel, Field


class ReserveIdsRequest(BaseModel):
    namespace_id: int = Field(0, ge=0)
    partition_id: str = Field(..., pattern=r"^\d{2}$")
    quantity: int = Field(..., gt=0)


class ReserveIdsResponse(BaseModel):
    namespace_id: int
    partition_id: str
    ids: List[int]


class RegisterIdsRequest(BaseModel):
    namespace: int = Field(0, ge=0)
    ids: List[int] = Field(default_factory=list)


class IdentifierDescription(BaseModel):
    sctid: str
    item_id: str
    namespace_id: int
    partition_id: str
    check_digit: str
    valid: bool
