"""Unit tests for balance calculation"""

from datetime import datetime, timezone

import pytest

from splitledger.core.exceptions import BalanceConservationViolation
from splitledger.models.expense import Expense, ExpenseSplit, SplitType
from splitledger.models.settlement import Settlement
from splitledger.services.balance_service import BalanceService
from splitledger.services.split_strategies import EqualSplitStrategy
from splitledger.utils.money import to_smallest_unit


def equal_expense(expense_id, payer, participants, total, currency="USD", group_id="group-1", **fields):
    return Expense(
        id=expense_id,
        group_id=group_id,
        total_amount=total,
        currency=currency,
        payer_id=payer,
        participant_ids=participants,
        split_type=SplitType.EQUAL,
        splits=EqualSplitStrategy().calculate(total, currency, participants),
        **fields,
    )


def settlement(settlement_id, payer, payee, amount, currency="USD", group_id="group-1", **fields):
    return Settlement(
        id=settlement_id, group_id=group_id, payer_id=payer, payee_id=payee,
        amount=amount, currency=currency, **fields,
    )


class TestCalculateNetBalances:
    """Test BalanceService.calculate_net_balances"""

    def test_single_expense(self, alice, bob, carol):
        expenses = [equal_expense("e1", alice, [alice, bob, carol], "90.00")]

        balances = BalanceService.calculate_net_balances(expenses, [])

        assert balances == {"USD": {"alice": "60.00", "bob": "-30.00", "carol": "-30.00"}}

    def test_settlement_moves_balance(self, alice, bob, carol):
        expenses = [equal_expense("e1", alice, [alice, bob, carol], "90.00")]
        settlements = [settlement("s1", bob, alice, "30.00")]

        balances = BalanceService.calculate_net_balances(expenses, settlements)

        assert balances["USD"] == {"alice": "30.00", "bob": "0.00", "carol": "-30.00"}

    def test_payer_outside_participants_is_credited(self, alice, bob, carol):
        expense = Expense(
            id="e1", group_id="group-1", total_amount="20.00", currency="USD",
            payer_id=carol, participant_ids=[alice, bob], split_type=SplitType.EQUAL,
            splits=EqualSplitStrategy().calculate("20.00", "USD", [alice, bob]),
        )

        balances = BalanceService.calculate_net_balances([expense], [])

        assert balances["USD"] == {"alice": "-10.00", "bob": "-10.00", "carol": "20.00"}

    def test_currencies_are_kept_apart(self, alice, bob):
        expenses = [
            equal_expense("e1", alice, [alice, bob], "10.00", "USD"),
            equal_expense("e2", bob, [alice, bob], "1000", "JPY"),
        ]

        balances = BalanceService.calculate_net_balances(expenses, [])

        assert balances == {
            "JPY": {"alice": "-500", "bob": "500"},
            "USD": {"alice": "5.00", "bob": "-5.00"},
        }

    def test_deleted_and_superseded_are_skipped(self, alice, bob):
        now = datetime.now(timezone.utc)
        expenses = [
            equal_expense("e1", alice, [alice, bob], "10.00", deleted_at=now),
            equal_expense("e2", alice, [alice, bob], "20.00", superseded_by="e3"),
            equal_expense("e3", alice, [alice, bob], "30.00"),
        ]
        settlements = [settlement("s1", bob, alice, "5.00", deleted_at=now)]

        balances = BalanceService.calculate_net_balances(expenses, settlements)

        assert balances["USD"] == {"alice": "15.00", "bob": "-15.00"}

    def test_members_start_at_zero(self, alice, bob, carol):
        expenses = [equal_expense("e1", alice, [alice, bob], "10.00")]

        balances = BalanceService.calculate_net_balances(expenses, [], member_ids=[carol])

        assert balances["USD"]["carol"] == "0.00"

    def test_no_transactions(self):
        assert BalanceService.calculate_net_balances([], [], member_ids=["alice"]) == {}

    @pytest.mark.parametrize("n", [2, 3, 7])
    def test_conservation(self, n):
        users = [f"user-{i}" for i in range(n)]
        expenses = [
            equal_expense(f"e{i}", users[i % n], users, total)
            for i, total in enumerate(["100.00", "0.01", "33.33", "999.99"])
        ]
        settlements = [settlement("s1", users[1], users[0], "12.34")]

        balances = BalanceService.calculate_net_balances(expenses, settlements)

        assert sum(to_smallest_unit(v, "USD") for v in balances["USD"].values()) == 0

    def test_corrupted_splits_are_reported(self, alice, bob):
        expense = Expense(
            id="e1", group_id="group-1", total_amount="10.00", currency="USD",
            payer_id=alice, participant_ids=[alice, bob], split_type=SplitType.EXACT,
            splits=[
                ExpenseSplit(participant_id=alice, owed_amount="5.00"),
                ExpenseSplit(participant_id=bob, owed_amount="4.00"),
            ],
        )

        with pytest.raises(BalanceConservationViolation) as exc_info:
            BalanceService.calculate_net_balances([expense], [])
        assert exc_info.value.details == {"currency": "USD", "sum": "1.00"}


class TestGetGroupBalances:
    """Test BalanceService.get_group_balances"""

    def test_group_picture(self, group_id, alice, bob, carol, memberships):
        expenses = [equal_expense("e1", alice, [alice, bob, carol], "90.00")]

        result = BalanceService.get_group_balances(group_id, expenses, [], memberships)

        assert result.balances_by_currency["USD"] == {
            "alice": "60.00", "bob": "-30.00", "carol": "-30.00",
        }
        debts = result.simplified_debts["USD"]
        assert [(d.from_user_id, d.to_user_id, d.amount) for d in debts] == [
            ("bob", "alice", "30.00"),
            ("carol", "alice", "30.00"),
        ]
        summaries = {s.user_id: s for s in result.user_summaries}
        assert summaries["alice"].owed_by == {"bob": "30.00", "carol": "30.00"}
        assert summaries["bob"].owes == {"alice": "30.00"}
        assert [e.is_locked for e in result.expenses] == [False]

    def test_other_groups_are_ignored(self, group_id, alice, bob, memberships):
        expenses = [
            equal_expense("e1", alice, [alice, bob], "10.00"),
            equal_expense("e2", bob, [alice, bob], "50.00", group_id="other-group"),
        ]

        result = BalanceService.get_group_balances(group_id, expenses, [], memberships)

        assert result.balances_by_currency["USD"]["alice"] == "5.00"
        assert [e.id for e in result.expenses] == ["e1"]

    def test_lock_annotations_follow_memberships(self, group_id, alice, bob, carol, make_memberships):
        expenses = [
            equal_expense("e1", alice, [alice, bob], "10.00"),
            equal_expense("e2", alice, [alice, carol], "10.00"),
        ]
        settlements = [settlement("s1", carol, alice, "5.00")]

        departed = make_memberships(alice, bob, carol="archived")
        result = BalanceService.get_group_balances(group_id, expenses, settlements, departed)
        assert [e.is_locked for e in result.expenses] == [False, True]
        assert [s.is_locked for s in result.settlements] == [True]

        rejoined = make_memberships(alice, bob, carol)
        result = BalanceService.get_group_balances(group_id, expenses, settlements, rejoined)
        assert [e.is_locked for e in result.expenses] == [False, False]
        assert [s.is_locked for s in result.settlements] == [False]

    def test_departed_member_keeps_balance(self, group_id, alice, carol, make_memberships):
        expenses = [equal_expense("e1", alice, [alice, carol], "10.00")]

        result = BalanceService.get_group_balances(
            group_id, expenses, [], make_memberships(alice, carol="archived")
        )

        assert result.balances_by_currency["USD"]["carol"] == "-5.00"
