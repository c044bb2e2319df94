"""Currency endpoints"""
from typing import List

from fastapi import APIRouter

from splitledger.core.currencies import list_currencies
from splitledger.models.currency import Currency

router = APIRouter(prefix="/currencies", tags=["Currencies"])


@router.get("", response_model=List[Currency])
async def get_currencies():
    """List supported currencies, ordered by code"""
    return list_currencies()
