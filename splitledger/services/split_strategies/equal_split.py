"""Equal split strategy"""

from typing import List, Optional

from splitledger.models.expense import ExpenseSplit, SplitInput, SplitType
from splitledger.services.split_strategies.base import BaseSplitStrategy


class EqualSplitStrategy(BaseSplitStrategy):
    """Strategy for splitting expense equally among participants"""

    split_type = SplitType.EQUAL

    def validate_splits(
        self,
        total_units: int,
        currency: str,
        participant_ids: List[str],
        splits: Optional[List[SplitInput]],
    ) -> None:
        # Amounts are derived, so provided splits are ignored
        return None

    def build_splits(
        self,
        total_units: int,
        currency: str,
        participant_ids: List[str],
        splits: Optional[List[SplitInput]],
    ) -> List[ExpenseSplit]:
        """
        Calculate equal split for all participants.

        Every participant gets the integer quotient of the total's smallest
        units; the remainder is handed out one unit at a time in participant
        order, so 100.00 / 3 gives 33.34, 33.33, 33.33.

        Returns:
            List of ExpenseSplit summing exactly to the total
        """
        quotient, remainder = divmod(total_units, len(participant_ids))

        return [
            self.make_split(
                participant_id,
                quotient + (1 if index < remainder else 0),
                currency,
            )
            for index, participant_id in enumerate(participant_ids)
        ]
