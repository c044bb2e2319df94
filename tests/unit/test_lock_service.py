"""Test transaction locking"""

import pytest

from splitledger.core.exceptions import DepartedParticipant, TransactionLocked
from splitledger.models.expense import Expense, ExpenseSplit, SplitType
from splitledger.models.membership import Membership, MembershipStatus
from splitledger.models.settlement import Settlement
from splitledger.services.lock_service import LockService
from splitledger.services.split_strategies import EqualSplitStrategy


@pytest.fixture
def expense(group_id, alice, bob, carol):
    participants = [alice, bob, carol]
    return Expense(
        id="exp-1",
        group_id=group_id,
        total_amount="90.00",
        currency="USD",
        payer_id=alice,
        participant_ids=participants,
        split_type=SplitType.EQUAL,
        splits=EqualSplitStrategy().calculate("90.00", "USD", participants),
    )


@pytest.fixture
def settlement(group_id, alice, bob):
    return Settlement(
        id="set-1", group_id=group_id, payer_id=bob, payee_id=alice,
        amount="30.00", currency="USD",
    )


class TestActiveMemberIds:
    """Test active member collection"""

    def test_only_active_members(self, make_memberships):
        memberships = make_memberships("alice", bob="archived", carol="pending")
        assert LockService.active_member_ids(memberships) == {"alice"}

    def test_group_filter(self, group_id):
        memberships = [
            Membership(user_id="alice", group_id=group_id),
            Membership(user_id="bob", group_id="other-group"),
        ]
        assert LockService.active_member_ids(memberships, group_id) == {"alice"}


class TestExpenseLocking:
    """Test expense lock evaluation"""

    def test_unlocked_when_all_active(self, expense):
        assert not LockService.is_expense_locked(expense, {"alice", "bob", "carol"})
        LockService.ensure_expense_editable(expense, {"alice", "bob", "carol"})

    def test_locked_when_participant_left(self, expense):
        assert LockService.is_expense_locked(expense, {"alice", "bob"})

        with pytest.raises(TransactionLocked) as exc_info:
            LockService.ensure_expense_editable(expense, {"alice", "bob"})
        assert exc_info.value.details["user_ids"] == ["carol"]
        assert exc_info.value.status_code == 409

    def test_lock_is_recomputed(self, expense, make_memberships):
        departed = LockService.active_member_ids(make_memberships("alice", "bob", carol="archived"))
        rejoined = LockService.active_member_ids(make_memberships("alice", "bob", "carol"))

        assert LockService.is_expense_locked(expense, departed)
        assert not LockService.is_expense_locked(expense, rejoined)


class TestSettlementLocking:
    """Test settlement lock evaluation"""

    def test_unlocked(self, settlement):
        assert not LockService.is_settlement_locked(settlement, {"alice", "bob"})

    @pytest.mark.parametrize("active", [{"alice"}, {"bob"}, set()])
    def test_locked(self, settlement, active):
        assert LockService.is_settlement_locked(settlement, active)
        with pytest.raises(TransactionLocked):
            LockService.ensure_settlement_editable(settlement, active)


class TestEnsureParticipantsActive:
    """Test the write-path membership check"""

    def test_all_active(self):
        LockService.ensure_participants_active(["alice", "bob"], {"alice", "bob"})

    def test_names_departed_users(self):
        with pytest.raises(DepartedParticipant) as exc_info:
            LockService.ensure_participants_active(
                ["alice", "dave", "erin", "dave"], {"alice", "bob"}
            )
        assert exc_info.value.details == {"user_ids": ["dave", "erin"]}
        assert exc_info.value.status_code == 400

    def test_pending_is_not_active(self):
        memberships = [
            Membership(user_id="alice", group_id="g", status=MembershipStatus.PENDING)
        ]
        with pytest.raises(DepartedParticipant):
            LockService.ensure_participants_active(
                ["alice"], LockService.active_member_ids(memberships)
            )


class TestSplitUsersLockExpense:
    """Split users count towards the lock even when missing from participant_ids"""

    def test_departed_split_user_locks(self, group_id, alice, bob, carol):
        expense = Expense.model_construct(
            id="exp-2",
            group_id=group_id,
            total_amount="30.00",
            currency="USD",
            payer_id=alice,
            participant_ids=[alice, bob],
            split_type=SplitType.EXACT,
            splits=[
                ExpenseSplit(participant_id=alice, owed_amount="10.00"),
                ExpenseSplit(participant_id=bob, owed_amount="10.00"),
                ExpenseSplit(participant_id=carol, owed_amount="10.00"),
            ],
        )

        assert LockService.is_expense_locked(expense, {alice, bob})
        with pytest.raises(TransactionLocked) as exc_info:
            LockService.ensure_expense_editable(expense, {alice, bob})
        assert exc_info.value.details["user_ids"] == [carol]
