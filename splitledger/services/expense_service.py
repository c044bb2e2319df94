"""Expense business logic"""
import logging
import uuid
from typing import Iterable, Optional, Set, Tuple

from splitledger.core.currencies import get_currency
from splitledger.core.exceptions import (ConflictError, PayerNotParticipant,
                                         ValidationError)
from splitledger.models.expense import Expense, utc_now
from splitledger.models.membership import Membership
from splitledger.schemas.expense import ExpenseBase, ExpenseCreate, ExpenseUpdate
from splitledger.services.lock_service import LockService
from splitledger.services.split_strategies import get_split_strategy
from splitledger.utils.money import normalize

logger = logging.getLogger(__name__)


class ExpenseService:
    """Service for expense operations"""

    @staticmethod
    def build_expense(
        data: ExpenseBase, group_id: str, active_ids: Set[str], **fields
    ) -> Expense:
        """
        Validate expense fields and produce a record with finalized splits.

        Args:
            data: Expense fields
            group_id: Group the expense belongs to
            active_ids: Ids of active group members
            **fields: Extra record fields (created_at, ...)

        Returns:
            New Expense

        Raises:
            InvalidCurrency: If the currency is unknown
            DepartedParticipant: If the payer or a participant is not active
            PayerNotParticipant: If the payer does not share the expense
            ValidationError: Any split validation failure
        """
        currency = get_currency(data.currency).code

        LockService.ensure_participants_active(
            [data.payer_id, *data.participant_ids], active_ids
        )

        strategy = get_split_strategy(data.split_type)
        splits = strategy.calculate(
            data.total_amount, currency, data.participant_ids, data.splits
        )

        if data.payer_id not in data.participant_ids:
            raise PayerNotParticipant(
                f"Payer {data.payer_id} must be one of the participants",
                details={"payer_id": data.payer_id},
            )

        return Expense(
            id=data.id or str(uuid.uuid4()),
            group_id=group_id,
            description=data.description,
            total_amount=normalize(data.total_amount, currency),
            currency=currency,
            payer_id=data.payer_id,
            participant_ids=list(data.participant_ids),
            split_type=strategy.split_type,
            splits=splits,
            **fields,
        )

    @staticmethod
    def create_expense(
        data: ExpenseCreate, memberships: Iterable[Membership]
    ) -> Expense:
        """
        Create a new expense.

        Args:
            data: Expense creation data
            memberships: Current memberships of the group

        Returns:
            Validated expense ready to be stored

        Raises:
            ValidationError: If validation fails
        """
        active_ids = LockService.active_member_ids(memberships, data.group_id)
        try:
            expense = ExpenseService.build_expense(data, data.group_id, active_ids)
        except ValidationError as e:
            logger.warning("Rejected expense in group %s: %s", data.group_id, e.message)
            raise

        logger.info(
            "Created expense %s in group %s: %s %s",
            expense.id, expense.group_id, expense.total_amount, expense.currency,
        )
        return expense

    @staticmethod
    def ensure_live(expense: Expense) -> None:
        """
        Raises:
            ConflictError: If the expense was deleted or replaced by a newer version
        """
        if expense.deleted_at is not None:
            raise ConflictError(
                f"Expense {expense.id} has been deleted",
                details={"expense_id": expense.id},
            )
        if expense.superseded_by is not None:
            raise ConflictError(
                f"Expense {expense.id} was superseded by {expense.superseded_by}",
                details={"expense_id": expense.id, "superseded_by": expense.superseded_by},
            )

    @staticmethod
    def update_expense(
        existing: Expense, data: ExpenseUpdate, memberships: Iterable[Membership]
    ) -> Tuple[Expense, Expense]:
        """
        Replace an expense with a new version.

        Args:
            existing: Currently stored version
            data: Fields of the new version
            memberships: Current memberships of the group

        Returns:
            (previous version marked as superseded, new version)

        Raises:
            ConflictError: If the stored version is no longer live
            TransactionLocked: If a participant of the stored version left
            ValidationError: If the new fields are invalid
        """
        ExpenseService.ensure_live(existing)
        active_ids = LockService.active_member_ids(memberships, existing.group_id)
        LockService.ensure_expense_editable(existing, active_ids)

        if data.id is not None and data.id == existing.id:
            raise ConflictError(
                "New expense version needs an id different from the stored one",
                details={"expense_id": existing.id},
            )

        now = utc_now()
        try:
            new_version = ExpenseService.build_expense(
                data,
                existing.group_id,
                active_ids,
                created_at=existing.created_at,
                updated_at=now,
            )
        except ValidationError as e:
            logger.warning("Rejected update of expense %s: %s", existing.id, e.message)
            raise

        previous = existing.model_copy(
            update={"superseded_by": new_version.id, "updated_at": now}
        )
        logger.info("Expense %s superseded by %s", existing.id, new_version.id)
        return previous, new_version

    @staticmethod
    def delete_expense(
        existing: Expense,
        memberships: Iterable[Membership],
        deleted_by: Optional[str] = None,
    ) -> Expense:
        """
        Soft delete an expense.

        Returns:
            Copy of the expense with deleted_at set

        Raises:
            ConflictError: If the expense is no longer live
            TransactionLocked: If a participant left the group
        """
        ExpenseService.ensure_live(existing)
        active_ids = LockService.active_member_ids(memberships, existing.group_id)
        LockService.ensure_expense_editable(existing, active_ids)

        now = utc_now()
        deleted = existing.model_copy(
            update={"deleted_at": now, "deleted_by": deleted_by, "updated_at": now}
        )
        logger.info("Deleted expense %s", existing.id)
        return deleted
