"""Settlement schemas"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from splitledger.models.expense import coerce_amount
from splitledger.models.settlement import Settlement
from splitledger.schemas.common import MembershipSnapshot


class SettlementBase(BaseModel):
    """Base settlement schema"""

    id: Optional[str] = None
    payer_id: str
    payee_id: str
    amount: str
    currency: str
    note: Optional[str] = Field(default=None, max_length=500)

    @field_validator("amount", mode="before")
    @classmethod
    def convert_amount(cls, v):
        return coerce_amount(v)


class SettlementCreate(SettlementBase):
    """Schema for recording a settlement"""

    group_id: str


class SettlementUpdate(SettlementBase):
    """Schema for the new version of a settlement"""


class SettlementCreateRequest(SettlementCreate, MembershipSnapshot):
    pass


class SettlementUpdateRequest(MembershipSnapshot):
    existing: Settlement
    update: SettlementUpdate


class SettlementDeleteRequest(MembershipSnapshot):
    existing: Settlement
    deleted_by: Optional[str] = None


class SettlementUpdateResponse(BaseModel):
    previous: Settlement
    settlement: Settlement
