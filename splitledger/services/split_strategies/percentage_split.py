"""Percentage split strategy"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, List, Optional, Sequence

from splitledger.config import get_settings
from splitledger.core.exceptions import (InvalidPercentageTotal,
                                         InvalidSplitTotal, MissingSplits)
from splitledger.models.expense import ExpenseSplit, SplitInput, SplitType
from splitledger.services.split_strategies.base import BaseSplitStrategy
from splitledger.utils.money import from_smallest_unit

HUNDRED = Decimal("100")


class PercentageSplitStrategy(BaseSplitStrategy):
    """Strategy for splitting expense by percentage"""

    split_type = SplitType.PERCENTAGE

    def __init__(self, percentage_tolerance: Optional[Decimal] = None):
        if percentage_tolerance is None:
            percentage_tolerance = get_settings().percentage_tolerance
        self.percentage_tolerance = percentage_tolerance

    def check_percentages(self, splits: List[SplitInput]) -> None:
        """
        Validate that each percentage is in [0, 100] and they sum to 100.

        Raises:
            MissingSplits: If a split has no percentage
            InvalidPercentageTotal: If a percentage is out of range or the sum
                is off by more than the tolerance
        """
        for split in splits:
            if split.percentage is None:
                raise MissingSplits(
                    f"Split percentage is required for participant {split.participant_id}",
                    details={"participant_id": split.participant_id},
                )
            if not split.percentage.is_finite() or not (0 <= split.percentage <= HUNDRED):
                raise InvalidPercentageTotal(
                    f"Percentage must be between 0 and 100, got {split.percentage}",
                    details={"participant_id": split.participant_id},
                )

        total_percentage = sum((s.percentage for s in splits), Decimal("0"))
        if abs(total_percentage - HUNDRED) > self.percentage_tolerance:
            raise InvalidPercentageTotal(
                f"Percentages must sum to 100%, got {total_percentage}%",
                details={"percentage_total": str(total_percentage)},
            )

    def validate_splits(
        self,
        total_units: int,
        currency: str,
        participant_ids: List[str],
        splits: Optional[List[SplitInput]],
    ) -> None:
        """
        Validate percentages and their monetary equivalents independently.

        Percentages must sum to 100 within the tolerance, and the owed
        amounts must add up to the total exactly in smallest units.
        """
        self.check_split_users(participant_ids, splits)
        self.check_percentages(splits)

        assigned_units = sum(self.owed_units(split, currency) for split in splits)
        if assigned_units != total_units:
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
        splits: Optional[List[SplitInput]],
    ) -> List[ExpenseSplit]:
        return [
            self.make_split(
                split.participant_id,
                self.owed_units(split, currency),
                currency,
                percentage=split.percentage,
            )
            for split in self.in_participant_order(participant_ids, splits)
        ]

    def amounts_for_percentages(
        self,
        total_amount,
        currency: str,
        participant_ids: Sequence[str],
        percentages: Dict[str, Decimal],
    ) -> List[ExpenseSplit]:
        """
        Compute the owed amount matching each participant's percentage.

        Each share is rounded half-up in smallest units; the rounding
        residual is then handed out one unit at a time in participant order,
        so the result always sums to the total and passes validate().

        Args:
            total_amount: Expense total
            currency: Currency code
            participant_ids: Ordered participant ids
            percentages: Mapping of participant id to percentage

        Returns:
            List of ExpenseSplit with owed_amount and percentage filled in
        """
        total_units = self._total_units(total_amount, currency)
        participants = self._participants(participant_ids)
        splits = [
            SplitInput(participant_id=uid, percentage=pct)
            for uid, pct in percentages.items()
        ]
        self.check_split_users(participants, splits)
        self.check_percentages(splits)

        ordered = self.in_participant_order(participants, splits)
        units = [
            int(
                (Decimal(total_units) * s.percentage / HUNDRED).to_integral_value(
                    rounding=ROUND_HALF_UP
                )
            )
            for s in ordered
        ]

        residual = total_units - sum(units)
        step = 1 if residual > 0 else -1
        index = 0
        while residual != 0:
            if step > 0 or units[index] > 0:
                units[index] += step
                residual -= step
            index = (index + 1) % len(units)

        return [
            self.make_split(s.participant_id, value, currency, percentage=s.percentage)
            for s, value in zip(ordered, units)
        ]
