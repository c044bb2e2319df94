"""Split calculation strategies"""

from typing import Union

from splitledger.core.exceptions import ValidationError
from splitledger.models.expense import SplitType
from splitledger.services.split_strategies.base import BaseSplitStrategy
from splitledger.services.split_strategies.equal_split import EqualSplitStrategy
from splitledger.services.split_strategies.exact_split import ExactSplitStrategy
from splitledger.services.split_strategies.percentage_split import \
    PercentageSplitStrategy


def get_split_strategy(split_type: Union[SplitType, str]) -> BaseSplitStrategy:
    """
    Get appropriate split strategy based on split type.

    Args:
        split_type: Type of split (EQUAL, EXACT or PERCENTAGE)

    Returns:
        Instance of appropriate strategy

    Raises:
        ValidationError: If split_type is not recognized
    """
    strategies = {
        SplitType.EQUAL: EqualSplitStrategy,
        SplitType.EXACT: ExactSplitStrategy,
        SplitType.PERCENTAGE: PercentageSplitStrategy,
    }

    try:
        key = SplitType(split_type)
    except ValueError:
        raise ValidationError(
            f"Unknown split type: {split_type}",
            details={"field": "split_type"},
        )

    return strategies[key]()


__all__ = [
    "BaseSplitStrategy",
    "EqualSplitStrategy",
    "ExactSplitStrategy",
    "PercentageSplitStrategy",
    "get_split_strategy",
]
