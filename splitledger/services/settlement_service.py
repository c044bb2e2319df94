"""Settlement business logic"""
import logging
import uuid
from typing import Iterable, Optional, Set, Tuple

from splitledger.config import get_settings
from splitledger.core.currencies import get_currency
from splitledger.core.exceptions import (ConflictError, InvalidAmount,
                                         InvalidSettlement, ValidationError)
from splitledger.models.expense import utc_now
from splitledger.models.membership import Membership
from splitledger.models.settlement import Settlement
from splitledger.schemas.settlement import (SettlementBase, SettlementCreate,
                                            SettlementUpdate)
from splitledger.services.lock_service import LockService
from splitledger.utils.money import (from_smallest_unit, normalize,
                                     to_smallest_unit)

logger = logging.getLogger(__name__)


class SettlementService:
    """Service for settlement operations"""

    @staticmethod
    def validate_amount(amount, currency: str) -> int:
        """
        Check a settlement amount is positive and within the configured limit.

        Returns:
            Amount in smallest units

        Raises:
            InvalidAmount: If the amount is malformed, not positive or too large
        """
        units = to_smallest_unit(amount, currency)
        if units <= 0:
            raise InvalidAmount(
                f"Settlement amount must be greater than zero, got {amount}",
                details={"field": "amount"},
            )

        max_amount = get_settings().max_settlement_amount
        if units > to_smallest_unit(normalize(max_amount, currency), currency):
            raise InvalidAmount(
                f"Settlement amount cannot exceed {normalize(max_amount, currency)}",
                details={"field": "amount"},
            )
        return units

    @staticmethod
    def build_settlement(
        data: SettlementBase, group_id: str, active_ids: Set[str], **fields
    ) -> Settlement:
        """
        Validate settlement fields and produce a record.

        Raises:
            InvalidCurrency: If the currency is unknown
            InvalidSettlement: If payer and payee are the same user
            InvalidAmount: If the amount is unusable
            DepartedParticipant: If payer or payee is not active
        """
        currency = get_currency(data.currency).code

        if data.payer_id == data.payee_id:
            raise InvalidSettlement(
                "Payer and payee must be different users",
                details={"payer_id": data.payer_id, "payee_id": data.payee_id},
            )

        units = SettlementService.validate_amount(data.amount, currency)
        LockService.ensure_participants_active([data.payer_id, data.payee_id], active_ids)

        return Settlement(
            id=data.id or str(uuid.uuid4()),
            group_id=group_id,
            payer_id=data.payer_id,
            payee_id=data.payee_id,
            amount=from_smallest_unit(units, currency),
            currency=currency,
            note=data.note,
            **fields,
        )

    @staticmethod
    def create_settlement(
        data: SettlementCreate, memberships: Iterable[Membership]
    ) -> Settlement:
        """
        Record a payment between two members.

        Args:
            data: Settlement creation data
            memberships: Current memberships of the group

        Returns:
            Validated settlement ready to be stored
        """
        active_ids = LockService.active_member_ids(memberships, data.group_id)
        try:
            settlement = SettlementService.build_settlement(data, data.group_id, active_ids)
        except ValidationError as e:
            logger.warning("Rejected settlement in group %s: %s", data.group_id, e.message)
            raise

        logger.info(
            "Created settlement %s: %s paid %s %s %s",
            settlement.id, settlement.payer_id, settlement.payee_id,
            settlement.amount, settlement.currency,
        )
        return settlement

    @staticmethod
    def ensure_live(settlement: Settlement) -> None:
        if settlement.deleted_at is not None:
            raise ConflictError(
                f"Settlement {settlement.id} has been deleted",
                details={"settlement_id": settlement.id},
            )
        if settlement.superseded_by is not None:
            raise ConflictError(
                f"Settlement {settlement.id} was superseded by {settlement.superseded_by}",
                details={
                    "settlement_id": settlement.id,
                    "superseded_by": settlement.superseded_by,
                },
            )

    @staticmethod
    def update_settlement(
        existing: Settlement,
        data: SettlementUpdate,
        memberships: Iterable[Membership],
    ) -> Tuple[Settlement, Settlement]:
        """
        Replace a settlement with a new version.

        Returns:
            (previous version marked as superseded, new version)

        Raises:
            ConflictError: If the stored version is no longer live
            TransactionLocked: If payer or payee of the stored version left
            ValidationError: If the new fields are invalid
        """
        SettlementService.ensure_live(existing)
        active_ids = LockService.active_member_ids(memberships, existing.group_id)
        LockService.ensure_settlement_editable(existing, active_ids)

        if data.id is not None and data.id == existing.id:
            raise ConflictError(
                "New settlement version needs an id different from the stored one",
                details={"settlement_id": existing.id},
            )

        now = utc_now()
        try:
            new_version = SettlementService.build_settlement(
                data,
                existing.group_id,
                active_ids,
                created_at=existing.created_at,
                updated_at=now,
            )
        except ValidationError as e:
            logger.warning("Rejected update of settlement %s: %s", existing.id, e.message)
            raise

        previous = existing.model_copy(
            update={"superseded_by": new_version.id, "updated_at": now}
        )
        logger.info("Settlement %s superseded by %s", existing.id, new_version.id)
        return previous, new_version

    @staticmethod
    def delete_settlement(
        existing: Settlement,
        memberships: Iterable[Membership],
        deleted_by: Optional[str] = None,
    ) -> Settlement:
        """
        Soft delete a settlement.

        Raises:
            ConflictError: If the settlement is no longer live
            TransactionLocked: If payer or payee left the group
        """
        SettlementService.ensure_live(existing)
        active_ids = LockService.active_member_ids(memberships, existing.group_id)
        LockService.ensure_settlement_editable(existing, active_ids)

        now = utc_now()
        deleted = existing.model_copy(
            update={"deleted_at": now, "deleted_by": deleted_by, "updated_at": now}
        )
        logger.info("Deleted settlement %s", existing.id)
        return deleted
