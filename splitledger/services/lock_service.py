"""Transaction locking rules"""

import logging
from typing import Iterable, List, Optional, Set

from splitledger.core.exceptions import DepartedParticipant, TransactionLocked
from splitledger.models.expense import Expense
from splitledger.models.membership import Membership
from splitledger.models.settlement import Settlement

logger = logging.getLogger(__name__)


class LockService:
    """
    Decides whether a transaction can still be changed.

    A transaction is locked while any user it references is not an active
    member of the group. Nothing is stored: the answer is recomputed from the
    current memberships on every call, so re-activating a member unlocks
    their transactions again.
    """

    @staticmethod
    def active_member_ids(
        memberships: Iterable[Membership], group_id: Optional[str] = None
    ) -> Set[str]:
        """
        Collect ids of active members.

        Args:
            memberships: Membership records
            group_id: Only consider memberships of this group, if given

        Returns:
            Set of active user ids
        """
        return {
            m.user_id
            for m in memberships
            if m.is_active and (group_id is None or m.group_id == group_id)
        }

    @staticmethod
    def expense_user_ids(expense: Expense) -> List[str]:
        """Participants followed by any split user not listed as a participant"""
        user_ids = list(expense.participant_ids)
        for split in expense.splits:
            if split.participant_id not in user_ids:
                user_ids.append(split.participant_id)
        return user_ids

    @staticmethod
    def is_expense_locked(expense: Expense, active_ids: Set[str]) -> bool:
        """An expense is locked if any participant or split user is no longer active"""
        return any(uid not in active_ids for uid in LockService.expense_user_ids(expense))

    @staticmethod
    def is_settlement_locked(settlement: Settlement, active_ids: Set[str]) -> bool:
        """A settlement is locked if its payer or payee is no longer active"""
        return (
            settlement.payer_id not in active_ids
            or settlement.payee_id not in active_ids
        )

    @staticmethod
    def ensure_participants_active(
        user_ids: Iterable[str], active_ids: Set[str]
    ) -> None:
        """
        Reject a write that references departed users.

        Raises:
            DepartedParticipant: Naming every referenced user who is not active
        """
        departed: List[str] = []
        for uid in user_ids:
            if uid not in active_ids and uid not in departed:
                departed.append(uid)

        if departed:
            raise DepartedParticipant(
                f"Users are no longer active group members: {', '.join(departed)}",
                details={"user_ids": departed},
            )

    @staticmethod
    def ensure_expense_editable(expense: Expense, active_ids: Set[str]) -> None:
        """
        Raises:
            TransactionLocked: If the expense references a departed participant
        """
        if LockService.is_expense_locked(expense, active_ids):
            departed = [
                uid for uid in LockService.expense_user_ids(expense) if uid not in active_ids
            ]
            logger.warning("Expense %s is locked by departed users %s", expense.id, departed)
            raise TransactionLocked(
                f"Expense {expense.id} is locked because a participant left the group",
                details={"expense_id": expense.id, "user_ids": departed},
            )

    @staticmethod
    def ensure_settlement_editable(settlement: Settlement, active_ids: Set[str]) -> None:
        """
        Raises:
            TransactionLocked: If the payer or payee has departed
        """
        if LockService.is_settlement_locked(settlement, active_ids):
            departed = [
                uid for uid in settlement.referenced_user_ids() if uid not in active_ids
            ]
            logger.warning(
                "Settlement %s is locked by departed users %s", settlement.id, departed
            )
            raise TransactionLocked(
                f"Settlement {settlement.id} is locked because a member left the group",
                details={"settlement_id": settlement.id, "user_ids": departed},
            )
