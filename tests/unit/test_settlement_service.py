"""Unit tests for settlement business logic"""

import pytest

from splitledger.core.exceptions import (ConflictError, DepartedParticipant,
                                         InvalidAmount, InvalidSettlement,
                                         TransactionLocked)
from splitledger.schemas.settlement import SettlementCreate, SettlementUpdate
from splitledger.services.settlement_service import SettlementService


@pytest.fixture
def settlement_data(group_id, alice, bob):
    return SettlementCreate(
        group_id=group_id, payer_id=bob, payee_id=alice, amount="30", currency="USD",
        note="Dinner",
    )


@pytest.fixture
def existing(settlement_data, memberships):
    return SettlementService.create_settlement(settlement_data, memberships)


class TestCreateSettlement:
    """Test settlement creation"""

    def test_create(self, settlement_data, memberships):
        settlement = SettlementService.create_settlement(settlement_data, memberships)

        assert settlement.amount == "30.00"
        assert settlement.note == "Dinner"
        assert settlement.is_live

    def test_payer_and_payee_differ(self, settlement_data, memberships, alice):
        data = settlement_data.model_copy(update={"payer_id": alice})

        with pytest.raises(InvalidSettlement):
            SettlementService.create_settlement(data, memberships)

    @pytest.mark.parametrize("amount", ["0", "-5.00", "1000000.00", "5.001"])
    def test_invalid_amount(self, settlement_data, memberships, amount):
        data = settlement_data.model_copy(update={"amount": amount})

        with pytest.raises(InvalidAmount):
            SettlementService.create_settlement(data, memberships)

    def test_maximum_amount_is_allowed(self, settlement_data, memberships):
        data = settlement_data.model_copy(update={"amount": "999999.99"})

        assert SettlementService.create_settlement(data, memberships).amount == "999999.99"

    def test_departed_payee(self, settlement_data, make_memberships, alice, bob):
        with pytest.raises(DepartedParticipant):
            SettlementService.create_settlement(
                settlement_data, make_memberships(bob, **{alice: "archived"})
            )


class TestUpdateAndDeleteSettlement:
    """Test settlement edits and deletes"""

    def test_update(self, existing, memberships, alice, bob):
        update = SettlementUpdate(payer_id=bob, payee_id=alice, amount="25.50", currency="USD")

        previous, new_version = SettlementService.update_settlement(existing, update, memberships)

        assert previous.superseded_by == new_version.id
        assert new_version.amount == "25.50"

    def test_locked_settlement(self, existing, make_memberships, alice, bob):
        update = SettlementUpdate(payer_id=bob, payee_id=alice, amount="25.50", currency="USD")
        memberships = make_memberships(alice, **{bob: "archived"})

        with pytest.raises(TransactionLocked):
            SettlementService.update_settlement(existing, update, memberships)
        with pytest.raises(TransactionLocked):
            SettlementService.delete_settlement(existing, memberships)

    def test_delete(self, existing, memberships, bob):
        deleted = SettlementService.delete_settlement(existing, memberships, deleted_by=bob)

        assert deleted.deleted_at is not None
        with pytest.raises(ConflictError):
            SettlementService.delete_settlement(deleted, memberships)
