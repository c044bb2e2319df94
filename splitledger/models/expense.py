"""Expense model"""
import enum
from collections import Counter
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import List, Optional

from pydantic import (BaseModel, ConfigDict, Field, field_validator,
                      model_validator)

from splitledger.core.exceptions import (DuplicateSplitUser, InvalidAmount,
                                         InvalidSplitUser, MissingSplits)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def coerce_amount(v):
    """Keep amounts as strings; JSON numbers are stringified, never float-rounded"""
    # bool is an int subclass; leave it for the str validator to reject
    if isinstance(v, (int, float, Decimal)) and not isinstance(v, bool):
        return str(v)
    return v


class SplitType(str, enum.Enum):
    """Enum for split types"""
    EQUAL = "equal"
    EXACT = "exact"
    PERCENTAGE = "percentage"


class SplitInput(BaseModel):
    """User-provided split for one participant (amount and/or percentage)"""

    participant_id: str
    owed_amount: Optional[str] = None
    percentage: Optional[Decimal] = None

    @field_validator("owed_amount", mode="before")
    @classmethod
    def convert_owed_amount(cls, v):
        return coerce_amount(v)


class ExpenseSplit(BaseModel):
    """Finalized share of an expense owed by one participant"""

    model_config = ConfigDict(frozen=True)

    participant_id: str
    owed_amount: str
    percentage: Optional[Decimal] = None

    @field_validator("owed_amount", mode="before")
    @classmethod
    def convert_owed_amount(cls, v):
        return coerce_amount(v)

    @field_validator("owed_amount")
    @classmethod
    def check_owed_amount(cls, v: str) -> str:
        """Owed amounts are never negative"""
        try:
            negative = Decimal(v) < 0
        except InvalidOperation:
            raise InvalidAmount(f"Malformed owed amount: {v!r}", details={"owed_amount": v})
        if negative:
            raise InvalidAmount(
                f"Amount owed cannot be negative, got {v}", details={"owed_amount": v}
            )
        return v


class Expense(BaseModel):
    """Shared expense paid by one member and owed by its participants"""

    id: str
    group_id: str
    description: str = ""
    total_amount: str
    currency: str = Field(..., min_length=3, max_length=3)
    payer_id: str
    participant_ids: List[str]
    split_type: SplitType
    splits: List[ExpenseSplit]
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
    deleted_at: Optional[datetime] = None
    deleted_by: Optional[str] = None
    superseded_by: Optional[str] = None

    @field_validator("total_amount", mode="before")
    @classmethod
    def convert_total_amount(cls, v):
        return coerce_amount(v)

    @field_validator("currency", mode="before")
    @classmethod
    def uppercase_currency(cls, v):
        return v.strip().upper() if isinstance(v, str) else v

    @model_validator(mode="after")
    def check_splits(self) -> "Expense":
        """Splits cover exactly the participants, one split each"""
        duplicates = sorted(uid for uid, n in Counter(self.participant_ids).items() if n > 1)
        if duplicates:
            raise DuplicateSplitUser(
                f"Participants listed more than once: {', '.join(duplicates)}",
                details={"participant_ids": duplicates},
            )

        split_user_ids = [s.participant_id for s in self.splits]
        duplicates = sorted(uid for uid, n in Counter(split_user_ids).items() if n > 1)
        if duplicates:
            raise DuplicateSplitUser(
                f"Each participant can only appear once in splits: {', '.join(duplicates)}",
                details={"participant_ids": duplicates},
            )

        participants = set(self.participant_ids)
        outsiders = [uid for uid in split_user_ids if uid not in participants]
        if outsiders:
            raise InvalidSplitUser(
                f"Split user must be a participant: {', '.join(outsiders)}",
                details={"participant_ids": outsiders},
            )

        covered = set(split_user_ids)
        missing = [uid for uid in self.participant_ids if uid not in covered]
        if missing:
            raise MissingSplits(
                f"Missing splits for participants: {', '.join(missing)}",
                details={"participant_ids": missing},
            )
        return self

    @property
    def is_live(self) -> bool:
        """Neither soft-deleted nor replaced by a newer version"""
        return self.deleted_at is None and self.superseded_by is None

    def referenced_user_ids(self) -> List[str]:
        """Payer followed by participants, without repeats"""
        seen = []
        for user_id in [self.payer_id, *self.participant_ids]:
            if user_id not in seen:
                seen.append(user_id)
        return seen

    def __repr__(self) -> str:
        return f"<Expense(id={self.id}, total_amount={self.total_amount} {self.currency})>"
