"""Exact split strategy"""
from typing import List, Optional

from splitledger.core.exceptions import InvalidSplitTotal
from splitledger.models.expense import ExpenseSplit, SplitInput, SplitType
from splitledger.services.split_strategies.base import BaseSplitStrategy
from splitledger.utils.money import from_smallest_unit, tolerance_units


class ExactSplitStrategy(BaseSplitStrategy):
    """Strategy for exact split with specified amounts"""

    split_type = SplitType.EXACT

    def validate_splits(
        self,
        total_units: int,
        currency: str,
        participant_ids: List[str],
        splits: Optional[List[SplitInput]]
    ) -> None:
        """
        Validate manually specified amounts.

        Raises:
            MissingSplits: If splits or amounts are missing
            InvalidSplitUser / DuplicateSplitUser: On a bad participant set
            InvalidAmount: If an amount is malformed or negative
            InvalidSplitTotal: If amounts don't sum to the total within tolerance
        """
        self.check_split_users(participant_ids, splits)

        assigned_units = sum(self.owed_units(split, currency) for split in splits)
        if abs(total_units - assigned_units) > tolerance_units(currency):
            raise InvalidSplitTotal(
                f"Sum of split amounts ({from_smallest_unit(assigned_units, currency)}) "
                f"must equal total amount ({from_smallest_unit(total_units, currency)})",
                details={
                    "total_amount": from_smallest_unit(total_units, currency),
                    "splits_total": from_smallest_unit(assigned_units, currency),
                },
            )

    def build_splits(
        self,
        total_units: int,
        currency: str,
        participant_ids: List[str],
        splits: Optional[List[SplitInput]]
    ) -> List[ExpenseSplit]:
        """
        Use the specified amounts, normalized to the currency.

        A residual within tolerance is moved onto the first split, in
        participant order, that stays non-negative, so the finalized splits
        always add up to the total.
        """
        ordered = self.in_participant_order(participant_ids, splits)
        units = [self.owed_units(split, currency) for split in ordered]

        residual = total_units - sum(units)
        if residual != 0:
            for index, value in enumerate(units):
                if value + residual >= 0:
                    units[index] = value + residual
                    break

        return [
            self.make_split(split.participant_id, value, currency)
            for split, value in zip(ordered, units)
        ]
