"""Test greedy debt simplification"""

import pytest

from splitledger.core.exceptions import BalanceConservationViolation
from splitledger.services.debt_simplifier import DebtSimplifier
from splitledger.utils.money import to_smallest_unit


def replay(balances, debts, currency):
    """Apply transfers to balances and return the resulting units"""
    units = {uid: to_smallest_unit(amount, currency) for uid, amount in balances.items()}
    for debt in debts:
        units[debt.from_user_id] += to_smallest_unit(debt.amount, currency)
        units[debt.to_user_id] -= to_smallest_unit(debt.amount, currency)
    return units


class TestSimplify:
    """Test DebtSimplifier.simplify"""

    def test_one_creditor_two_debtors(self):
        balances = {"alice": "60.00", "bob": "-30.00", "carol": "-30.00"}

        debts = DebtSimplifier.simplify(balances, "USD")

        assert [(d.from_user_id, d.to_user_id, d.amount) for d in debts] == [
            ("bob", "alice", "30.00"),
            ("carol", "alice", "30.00"),
        ]
        assert all(d.currency == "USD" for d in debts)

    def test_largest_parties_are_matched_first(self):
        balances = {"a": "100.00", "b": "-70.00", "c": "20.00", "d": "-50.00"}

        debts = DebtSimplifier.simplify(balances, "USD")

        assert [(d.from_user_id, d.to_user_id, d.amount) for d in debts] == [
            ("b", "a", "70.00"),
            ("d", "a", "30.00"),
            ("d", "c", "20.00"),
        ]

    def test_replay_zeroes_balances(self):
        balances = {
            "u1": "12.34", "u2": "-5.67", "u3": "-6.67", "u4": "3.00", "u5": "-3.00",
        }

        debts = DebtSimplifier.simplify(balances, "USD")

        assert all(v == 0 for v in replay(balances, debts, "USD").values())
        assert all(to_smallest_unit(d.amount, "USD") > 0 for d in debts)

    def test_deterministic_tie_break(self):
        balances = {"zed": "10", "amy": "10", "bob": "-10", "ann": "-10"}

        first = DebtSimplifier.simplify(balances, "JPY")
        second = DebtSimplifier.simplify(dict(reversed(list(balances.items()))), "JPY")

        assert first == second
        assert [(d.from_user_id, d.to_user_id) for d in first] == [
            ("ann", "amy"),
            ("bob", "zed"),
        ]

    def test_all_settled(self):
        assert DebtSimplifier.simplify({"alice": "0.00", "bob": "0.00"}, "USD") == []
        assert DebtSimplifier.simplify({}, "USD") == []

    def test_unbalanced_input(self):
        with pytest.raises(BalanceConservationViolation):
            DebtSimplifier.simplify({"alice": "10.00", "bob": "-9.99"}, "USD")


class TestSimplifyAll:
    """Test DebtSimplifier.simplify_all"""

    def test_currencies_are_independent(self):
        balances = {
            "USD": {"alice": "10.00", "bob": "-10.00"},
            "EUR": {"alice": "-5.00", "bob": "5.00"},
        }

        debts = DebtSimplifier.simplify_all(balances)

        assert list(debts) == ["EUR", "USD"]
        assert debts["EUR"][0].from_user_id == "alice"
        assert debts["USD"][0].from_user_id == "bob"
