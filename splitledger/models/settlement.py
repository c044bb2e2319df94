"""Settlement model"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from splitledger.core.exceptions import InvalidSettlement
from splitledger.models.expense import coerce_amount, utc_now


class Settlement(BaseModel):
    """Direct payment from one member to another"""

    id: str
    group_id: str
    payer_id: str
    payee_id: str
    amount: str
    currency: str = Field(..., min_length=3, max_length=3)
    note: Optional[str] = Field(default=None, max_length=500)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
    deleted_at: Optional[datetime] = None
    deleted_by: Optional[str] = None
    superseded_by: Optional[str] = None

    @field_validator("amount", mode="before")
    @classmethod
    def convert_amount(cls, v):
        return coerce_amount(v)

    @field_validator("currency", mode="before")
    @classmethod
    def uppercase_currency(cls, v):
        return v.strip().upper() if isinstance(v, str) else v

    @model_validator(mode="after")
    def check_parties(self) -> "Settlement":
        if self.payer_id == self.payee_id:
            raise InvalidSettlement(
                "Payer and payee must be different users",
                details={"payer_id": self.payer_id, "payee_id": self.payee_id},
            )
        return self

    @property
    def is_live(self) -> bool:
        return self.deleted_at is None and self.superseded_by is None

    def referenced_user_ids(self) -> List[str]:
        return [self.payer_id, self.payee_id]

    def __repr__(self) -> str:
        return (
            f"<Settlement(id={self.id}, payer={self.payer_id}, "
            f"payee={self.payee_id}, amount={self.amount} {self.currency})>"
        )
