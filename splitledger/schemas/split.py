"""Split calculation schemas"""
from decimal import Decimal
from typing import Dict, List, Optional

from pydantic import BaseModel, field_validator

from splitledger.models.expense import (ExpenseSplit, SplitInput, SplitType,
                                        coerce_amount)


class SplitCalculateRequest(BaseModel):
    """Input for a split preview"""

    total_amount: str
    currency: str
    participant_ids: List[str]
    split_type: SplitType
    splits: Optional[List[SplitInput]] = None

    @field_validator("total_amount", mode="before")
    @classmethod
    def convert_total_amount(cls, v):
        return coerce_amount(v)


class PercentageAmountsRequest(BaseModel):
    """Input for computing owed amounts from percentages"""

    total_amount: str
    currency: str
    participant_ids: List[str]
    percentages: Dict[str, Decimal]

    @field_validator("total_amount", mode="before")
    @classmethod
    def convert_total_amount(cls, v):
        return coerce_amount(v)


class SplitCalculateResponse(BaseModel):
    """Finalized splits in participant order"""
    splits: List[ExpenseSplit]
