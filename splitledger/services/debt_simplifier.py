"""Greedy debt simplification"""

import logging
from typing import Dict, List

from splitledger.core.exceptions import BalanceConservationViolation
from splitledger.schemas.balance import SimplifiedDebt
from splitledger.utils.money import from_smallest_unit, to_smallest_unit

logger = logging.getLogger(__name__)


class DebtSimplifier:
    """Turns net balances into a short list of transfers"""

    @staticmethod
    def simplify(balances: Dict[str, str], currency: str) -> List[SimplifiedDebt]:
        """
        Reduce net balances of one currency to a list of transfers.

        The largest debtor repeatedly pays the largest creditor the smaller of
        the two absolute balances; ties are broken by ascending user id, so the
        output is deterministic. Applying the returned transfers brings every
        balance to zero. The result is not guaranteed to be the minimum number
        of transfers.

        Args:
            balances: Mapping of user id to signed net balance
            currency: Currency code of the balances

        Returns:
            Transfers with strictly positive amounts

        Raises:
            BalanceConservationViolation: If the balances do not sum to zero
        """
        units = {
            user_id: to_smallest_unit(amount, currency)
            for user_id, amount in balances.items()
        }

        total = sum(units.values())
        if total != 0:
            logger.error(
                "Cannot simplify %s balances summing to %s",
                currency,
                from_smallest_unit(total, currency),
            )
            raise BalanceConservationViolation(
                f"Balances in {currency} sum to {from_smallest_unit(total, currency)}, expected zero",
                details={"currency": currency, "sum": from_smallest_unit(total, currency)},
            )

        creditors = {uid: value for uid, value in units.items() if value > 0}
        debtors = {uid: -value for uid, value in units.items() if value < 0}

        debts: List[SimplifiedDebt] = []
        while debtors:
            creditor = min(creditors, key=lambda uid: (-creditors[uid], uid))
            debtor = min(debtors, key=lambda uid: (-debtors[uid], uid))
            amount = min(creditors[creditor], debtors[debtor])

            debts.append(
                SimplifiedDebt(
                    from_user_id=debtor,
                    to_user_id=creditor,
                    amount=from_smallest_unit(amount, currency),
                    currency=currency,
                )
            )

            creditors[creditor] -= amount
            debtors[debtor] -= amount
            if creditors[creditor] == 0:
                del creditors[creditor]
            if debtors[debtor] == 0:
                del debtors[debtor]

        return debts

    @staticmethod
    def simplify_all(
        balances_by_currency: Dict[str, Dict[str, str]]
    ) -> Dict[str, List[SimplifiedDebt]]:
        """Simplify every currency independently, in sorted currency order"""
        return {
            currency: DebtSimplifier.simplify(balances_by_currency[currency], currency)
            for currency in sorted(balances_by_currency)
        }
