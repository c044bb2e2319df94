"""Ledger domain models"""
from splitledger.models.currency import Currency
from splitledger.models.expense import Expense, ExpenseSplit, SplitInput, SplitType
from splitledger.models.membership import Membership, MembershipStatus
from splitledger.models.settlement import Settlement

__all__ = [
    "Currency",
    "Expense",
    "ExpenseSplit",
    "SplitInput",
    "SplitType",
    "Membership",
    "MembershipStatus",
    "Settlement",
]
