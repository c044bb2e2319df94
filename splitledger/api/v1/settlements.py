"""Settlement endpoints"""
from fastapi import APIRouter, status

from splitledger.core.exceptions import ValidationError
from splitledger.models.settlement import Settlement
from splitledger.schemas.settlement import (SettlementCreateRequest,
                                            SettlementDeleteRequest,
                                            SettlementUpdateRequest,
                                            SettlementUpdateResponse)
from splitledger.services.settlement_service import SettlementService

router = APIRouter(prefix="/settlements", tags=["Settlements"])


def check_path_id(settlement_id: str, existing: Settlement) -> None:
    if existing.id != settlement_id:
        raise ValidationError(
            f"Settlement id {existing.id} does not match path id {settlement_id}",
            details={"field": "existing.id"},
        )


@router.post("", response_model=Settlement, status_code=status.HTTP_201_CREATED)
async def create_settlement(request: SettlementCreateRequest):
    """
    Validate a payment between two members.

    Raises:
        400: If the amount, currency or members are invalid
    """
    return SettlementService.create_settlement(request, request.memberships)


@router.put("/{settlement_id}", response_model=SettlementUpdateResponse)
async def update_settlement(settlement_id: str, request: SettlementUpdateRequest):
    """
    Produce a new version of a settlement.

    Raises:
        400: If the new fields are invalid
        409: If the settlement is locked, deleted or already superseded
    """
    check_path_id(settlement_id, request.existing)
    previous, settlement = SettlementService.update_settlement(
        request.existing, request.update, request.memberships
    )
    return SettlementUpdateResponse(previous=previous, settlement=settlement)


@router.post("/{settlement_id}/delete", response_model=Settlement)
async def delete_settlement(settlement_id: str, request: SettlementDeleteRequest):
    """Soft delete a settlement"""
    check_path_id(settlement_id, request.existing)
    return SettlementService.delete_settlement(
        request.existing, request.memberships, deleted_by=request.deleted_by
    )
