"""Split preview endpoints"""
from fastapi import APIRouter

from splitledger.core.currencies import get_currency
from splitledger.schemas.split import (PercentageAmountsRequest,
                                       SplitCalculateRequest,
                                       SplitCalculateResponse)
from splitledger.services.split_strategies import (PercentageSplitStrategy,
                                                   get_split_strategy)

router = APIRouter(prefix="/splits", tags=["Splits"])


@router.post("/calculate", response_model=SplitCalculateResponse)
async def calculate_splits(request: SplitCalculateRequest):
    """
    Validate a split and return the finalized per-participant amounts.

    Raises:
        400: If the amount, currency, participants or splits are invalid
    """
    currency = get_currency(request.currency).code
    strategy = get_split_strategy(request.split_type)
    splits = strategy.calculate(
        request.total_amount, currency, request.participant_ids, request.splits
    )
    return SplitCalculateResponse(splits=splits)


@router.post("/percentages", response_model=SplitCalculateResponse)
async def amounts_for_percentages(request: PercentageAmountsRequest):
    """
    Convert percentages into owed amounts that add up to the total exactly.

    Raises:
        400: If percentages are missing, out of range or do not sum to 100
    """
    currency = get_currency(request.currency).code
    splits = PercentageSplitStrategy().amounts_for_percentages(
        request.total_amount, currency, request.participant_ids, request.percentages
    )
    return SplitCalculateResponse(splits=splits)
