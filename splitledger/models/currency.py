"""Currency model"""
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class Currency(BaseModel):
    """Currency metadata from the static currency table"""

    model_config = ConfigDict(frozen=True)

    code: str = Field(..., min_length=3, max_length=3)
    name: str
    symbol: str
    decimal_digits: int = Field(..., ge=0, le=3)

    @property
    def tolerance(self) -> Decimal:
        """Rounding allowance: one smallest unit (10^-decimal_digits)"""
        return Decimal(1).scaleb(-self.decimal_digits)

    def __repr__(self) -> str:
        return f"<Currency(code={self.code}, decimal_digits={self.decimal_digits})>"
