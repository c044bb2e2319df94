"""Balance schemas"""
from typing import Dict, List

from pydantic import BaseModel, ConfigDict

from splitledger.models.expense import Expense
from splitledger.models.settlement import Settlement
from splitledger.schemas.common import MembershipSnapshot


class SimplifiedDebt(BaseModel):
    """Transfer that settles part of the group's balances"""
    from_user_id: str
    to_user_id: str
    amount: str
    currency: str

    model_config = ConfigDict(frozen=True)


class UserBalanceSummary(BaseModel):
    """A user's position in one currency"""
    user_id: str
    currency: str
    net_balance: str  # positive = owed money, negative = owes money
    owes: Dict[str, str] = {}
    owed_by: Dict[str, str] = {}


class ExpenseWithLock(Expense):
    """Expense annotated with its current lock status"""
    is_locked: bool


class SettlementWithLock(Settlement):
    """Settlement annotated with its current lock status"""
    is_locked: bool


class GroupBalances(BaseModel):
    """Everything needed to render a group's finances"""
    group_id: str
    balances_by_currency: Dict[str, Dict[str, str]]
    simplified_debts: Dict[str, List[SimplifiedDebt]]
    user_summaries: List[UserBalanceSummary]
    expenses: List[ExpenseWithLock]
    settlements: List[SettlementWithLock]


class GroupBalancesRequest(MembershipSnapshot):
    """Snapshot of a group's transactions and memberships"""
    expenses: List[Expense] = []
    settlements: List[Settlement] = []
