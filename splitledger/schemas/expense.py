"""Expense schemas"""

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from splitledger.models.expense import (Expense, SplitInput, SplitType,
                                        coerce_amount)
from splitledger.schemas.common import MembershipSnapshot


class ExpenseBase(BaseModel):
    """Base expense schema"""

    id: Optional[str] = None
    description: str = Field(default="", max_length=500)
    total_amount: str
    currency: str
    payer_id: str
    participant_ids: List[str]
    split_type: SplitType
    splits: Optional[List[SplitInput]] = None

    @field_validator("total_amount", mode="before")
    @classmethod
    def convert_total_amount(cls, v):
        """Keep total_amount as an exact decimal string"""
        return coerce_amount(v)


class ExpenseCreate(ExpenseBase):
    """Schema for creating an expense"""

    group_id: str


class ExpenseUpdate(ExpenseBase):
    """Schema for the new version of an expense (group is kept from the old one)"""


class ExpenseCreateRequest(ExpenseCreate, MembershipSnapshot):
    """Create request: expense fields plus current group memberships"""


class ExpenseUpdateRequest(MembershipSnapshot):
    """Update request: stored version, new fields and current memberships"""

    existing: Expense
    update: ExpenseUpdate


class ExpenseDeleteRequest(MembershipSnapshot):
    """Delete request: stored version and current memberships"""

    existing: Expense
    deleted_by: Optional[str] = None


class ExpenseUpdateResponse(BaseModel):
    """Superseded previous version and the new version"""

    previous: Expense
    expense: Expense
