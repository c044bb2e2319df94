"""Balance endpoints"""
from fastapi import APIRouter

from splitledger.schemas.balance import GroupBalances, GroupBalancesRequest
from splitledger.services.balance_service import BalanceService

router = APIRouter(prefix="/groups", tags=["Balances"])


@router.post("/{group_id}/balances", response_model=GroupBalances)
async def get_group_balances(group_id: str, request: GroupBalancesRequest):
    """
    Calculate balances and simplified debts of a group.

    Args:
        group_id: Group ID
        request: The group's expenses, settlements and memberships

    Returns:
        Net balances per currency, simplified debts, per-user summaries and
        live transactions with their lock status
    """
    return BalanceService.get_group_balances(
        group_id, request.expenses, request.settlements, request.memberships
    )
