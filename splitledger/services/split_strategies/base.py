"""Base strategy interface"""

from abc import ABC, abstractmethod
from collections import Counter
from typing import Any, List, Optional, Sequence

from splitledger.core.exceptions import (DuplicateSplitUser, InvalidAmount,
                                         InvalidParticipants, InvalidSplitUser,
                                         MissingSplits)
from splitledger.models.expense import ExpenseSplit, SplitInput, SplitType
from splitledger.utils.money import from_smallest_unit, to_smallest_unit


def coerce_splits(splits: Optional[Sequence[Any]]) -> Optional[List[SplitInput]]:
    """Accept SplitInput objects or plain dicts from the caller"""
    if splits is None:
        return None
    return [
        s if isinstance(s, SplitInput) else SplitInput.model_validate(s)
        for s in splits
    ]


class BaseSplitStrategy(ABC):
    """Base class for split strategies"""

    split_type: SplitType

    def validate(
        self,
        total_amount: Any,
        currency: str,
        participant_ids: Sequence[str],
        splits: Optional[Sequence[Any]] = None,
    ) -> None:
        """
        Validate a split request without producing splits.

        Args:
            total_amount: Expense total in the given currency
            currency: Currency code
            participant_ids: Ordered participant user ids
            splits: User-provided splits, if the split type needs them

        Raises:
            ValidationError subclass describing the first structural problem
        """
        total_units = self._total_units(total_amount, currency)
        participants = self._participants(participant_ids)
        self.validate_splits(total_units, currency, participants, coerce_splits(splits))

    def calculate(
        self,
        total_amount: Any,
        currency: str,
        participant_ids: Sequence[str],
        splits: Optional[Sequence[Any]] = None,
    ) -> List[ExpenseSplit]:
        """
        Validate, then calculate the finalized splits.

        Returns:
            One ExpenseSplit per participant, in participant order
        """
        self.validate(total_amount, currency, participant_ids, splits)
        return self.build_splits(
            self._total_units(total_amount, currency),
            currency,
            list(participant_ids),
            coerce_splits(splits),
        )

    @abstractmethod
    def validate_splits(
        self,
        total_units: int,
        currency: str,
        participant_ids: List[str],
        splits: Optional[List[SplitInput]],
    ) -> None:
        """Type-specific validation on top of the common checks"""
        pass

    @abstractmethod
    def build_splits(
        self,
        total_units: int,
        currency: str,
        participant_ids: List[str],
        splits: Optional[List[SplitInput]],
    ) -> List[ExpenseSplit]:
        """Produce splits; only called after validation succeeded"""
        pass

    @staticmethod
    def _total_units(total_amount: Any, currency: str) -> int:
        units = to_smallest_unit(total_amount, currency)
        if units <= 0:
            raise InvalidAmount(
                f"Total amount must be greater than zero, got {total_amount}",
                details={"field": "total_amount"},
            )
        return units

    @staticmethod
    def _participants(participant_ids: Sequence[str]) -> List[str]:
        participants = list(participant_ids or [])
        if not participants:
            raise InvalidParticipants(
                "At least one participant is required",
                details={"field": "participant_ids"},
            )

        duplicates = sorted(uid for uid, n in Counter(participants).items() if n > 1)
        if duplicates:
            raise DuplicateSplitUser(
                f"Participants listed more than once: {', '.join(duplicates)}",
                details={"participant_ids": duplicates},
            )
        return participants

    @staticmethod
    def check_split_users(
        participant_ids: List[str], splits: Optional[List[SplitInput]]
    ) -> None:
        """
        Ensure the provided splits cover exactly the participants.

        Raises:
            MissingSplits: If no splits were given or a participant has none
            InvalidSplitUser: If a split names a non-participant
            DuplicateSplitUser: If a participant has more than one split
        """
        if not splits:
            raise MissingSplits(
                "Splits must be provided for all participants",
                details={"field": "splits"},
            )

        participant_set = set(participant_ids)
        split_user_ids = [s.participant_id for s in splits]

        outsiders = [uid for uid in split_user_ids if uid not in participant_set]
        if outsiders:
            raise InvalidSplitUser(
                f"Split user must be a participant: {', '.join(outsiders)}",
                details={"participant_ids": outsiders},
            )

        duplicates = sorted(uid for uid, n in Counter(split_user_ids).items() if n > 1)
        if duplicates:
            raise DuplicateSplitUser(
                f"Each participant can only appear once in splits: {', '.join(duplicates)}",
                details={"participant_ids": duplicates},
            )

        covered = set(split_user_ids)
        missing = [uid for uid in participant_ids if uid not in covered]
        if missing:
            raise MissingSplits(
                f"Missing splits for participants: {', '.join(missing)}",
                details={"participant_ids": missing},
            )

    @staticmethod
    def owed_units(split: SplitInput, currency: str) -> int:
        """Smallest-unit value of a provided owed amount (must be >= 0)"""
        if split.owed_amount is None:
            raise MissingSplits(
                f"Split amount is required for participant {split.participant_id}",
                details={"participant_id": split.participant_id},
            )

        units = to_smallest_unit(split.owed_amount, currency)
        if units < 0:
            raise InvalidAmount(
                f"Amount owed cannot be negative, got {split.owed_amount}",
                details={"participant_id": split.participant_id},
            )
        return units

    @staticmethod
    def in_participant_order(
        participant_ids: List[str], splits: List[SplitInput]
    ) -> List[SplitInput]:
        by_user = {s.participant_id: s for s in splits}
        return [by_user[uid] for uid in participant_ids]

    @staticmethod
    def make_split(
        participant_id: str, units: int, currency: str, percentage=None
    ) -> ExpenseSplit:
        return ExpenseSplit(
            participant_id=participant_id,
            owed_amount=from_smallest_unit(units, currency),
            percentage=percentage,
        )
