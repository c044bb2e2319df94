"""Balance calculation logic"""

import logging
from collections import defaultdict
from typing import Dict, Iterable, List, Optional

from splitledger.core.currencies import get_currency
from splitledger.core.exceptions import BalanceConservationViolation
from splitledger.models.expense import Expense
from splitledger.models.membership import Membership
from splitledger.models.settlement import Settlement
from splitledger.schemas.balance import (ExpenseWithLock, GroupBalances,
                                         SettlementWithLock, SimplifiedDebt,
                                         UserBalanceSummary)
from splitledger.services.debt_simplifier import DebtSimplifier
from splitledger.services.lock_service import LockService
from splitledger.utils.money import from_smallest_unit, to_smallest_unit

logger = logging.getLogger(__name__)


class BalanceService:
    """Service for balance calculation operations"""

    @staticmethod
    def calculate_net_balances(
        expenses: Iterable[Expense],
        settlements: Iterable[Settlement],
        member_ids: Optional[Iterable[str]] = None,
    ) -> Dict[str, Dict[str, str]]:
        """
        Calculate each user's net balance per currency.

        The payer of an expense is credited with the total and every
        participant is debited with their owed amount. A settlement credits
        the payer and debits the payee. Deleted and superseded records are
        skipped. All arithmetic is done in integer smallest units.

        Args:
            expenses: Expenses of the group
            settlements: Settlements of the group
            member_ids: Users who start at zero in every currency even
                without transactions

        Returns:
            Mapping currency -> user id -> signed balance
            (positive = is owed money, negative = owes money)

        Raises:
            BalanceConservationViolation: If a currency's balances do not sum to zero
        """
        units: Dict[str, Dict[str, int]] = defaultdict(dict)

        def credit(currency: str, user_id: str, value: int) -> None:
            units[currency][user_id] = units[currency].get(user_id, 0) + value

        for expense in expenses:
            if not expense.is_live:
                continue
            currency = get_currency(expense.currency).code
            for user_id in expense.referenced_user_ids():
                credit(currency, user_id, 0)

            credit(currency, expense.payer_id, to_smallest_unit(expense.total_amount, currency))
            for split in expense.splits:
                credit(currency, split.participant_id, -to_smallest_unit(split.owed_amount, currency))

        for settlement in settlements:
            if not settlement.is_live:
                continue
            currency = get_currency(settlement.currency).code
            amount = to_smallest_unit(settlement.amount, currency)
            credit(currency, settlement.payer_id, amount)
            credit(currency, settlement.payee_id, -amount)

        members = list(member_ids or [])
        for currency in units:
            for user_id in members:
                credit(currency, user_id, 0)

        balances: Dict[str, Dict[str, str]] = {}
        for currency in sorted(units):
            total = sum(units[currency].values())
            if total != 0:
                logger.error(
                    "Balances in %s sum to %s instead of zero",
                    currency,
                    from_smallest_unit(total, currency),
                )
                raise BalanceConservationViolation(
                    f"Balances in {currency} do not sum to zero",
                    details={"currency": currency, "sum": from_smallest_unit(total, currency)},
                )

            balances[currency] = {
                user_id: from_smallest_unit(units[currency][user_id], currency)
                for user_id in sorted(units[currency])
            }

        return balances

    @staticmethod
    def build_user_summaries(
        balances_by_currency: Dict[str, Dict[str, str]],
        debts_by_currency: Dict[str, List[SimplifiedDebt]],
    ) -> List[UserBalanceSummary]:
        """
        Describe each user's position, per currency, in terms of simplified debts.

        Returns:
            Summaries ordered by currency, then user id
        """
        summaries: List[UserBalanceSummary] = []
        for currency in sorted(balances_by_currency):
            debts = debts_by_currency.get(currency, [])
            for user_id, net_balance in balances_by_currency[currency].items():
                summaries.append(
                    UserBalanceSummary(
                        user_id=user_id,
                        currency=currency,
                        net_balance=net_balance,
                        owes={d.to_user_id: d.amount for d in debts if d.from_user_id == user_id},
                        owed_by={d.from_user_id: d.amount for d in debts if d.to_user_id == user_id},
                    )
                )
        return summaries

    @staticmethod
    def get_group_balances(
        group_id: str,
        expenses: Iterable[Expense],
        settlements: Iterable[Settlement],
        memberships: Iterable[Membership],
    ) -> GroupBalances:
        """
        Get the full financial picture of a group.

        Lock status is evaluated against the memberships passed in, so a
        member who rejoins unlocks their transactions on the next call.

        Args:
            group_id: Group ID
            expenses: Expense records (records of other groups are ignored)
            settlements: Settlement records (records of other groups are ignored)
            memberships: Current memberships

        Returns:
            GroupBalances with net balances, simplified debts, user summaries
            and live transactions annotated with is_locked
        """
        memberships = [m for m in memberships if m.group_id == group_id]
        live_expenses = [e for e in expenses if e.group_id == group_id and e.is_live]
        live_settlements = [
            s for s in settlements if s.group_id == group_id and s.is_live
        ]

        active_ids = LockService.active_member_ids(memberships)

        balances = BalanceService.calculate_net_balances(
            live_expenses, live_settlements, member_ids=sorted(active_ids)
        )
        debts = DebtSimplifier.simplify_all(balances)

        return GroupBalances(
            group_id=group_id,
            balances_by_currency=balances,
            simplified_debts=debts,
            user_summaries=BalanceService.build_user_summaries(balances, debts),
            expenses=[
                ExpenseWithLock(
                    **e.model_dump(),
                    is_locked=LockService.is_expense_locked(e, active_ids),
                )
                for e in live_expenses
            ],
            settlements=[
                SettlementWithLock(
                    **s.model_dump(),
                    is_locked=LockService.is_settlement_locked(s, active_ids),
                )
                for s in live_settlements
            ],
        )
