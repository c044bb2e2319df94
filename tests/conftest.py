"""Pytest fixtures and configuration"""

from typing import AsyncGenerator, Callable, List

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from splitledger.main import app
from splitledger.models.membership import Membership, MembershipStatus

GROUP_ID = "group-1"


@pytest.fixture
def group_id() -> str:
    return GROUP_ID


@pytest.fixture
def alice() -> str:
    return "alice"


@pytest.fixture
def bob() -> str:
    return "bob"


@pytest.fixture
def carol() -> str:
    return "carol"


@pytest.fixture
def make_memberships() -> Callable[..., List[Membership]]:
    """
    Build memberships for GROUP_ID.

    Users passed positionally are active; keyword arguments map a user id to
    a different status, e.g. make_memberships("alice", bob="archived").
    """

    def _make(*active_ids: str, **statuses: str) -> List[Membership]:
        memberships = [
            Membership(user_id=uid, group_id=GROUP_ID, status=MembershipStatus.ACTIVE)
            for uid in active_ids
        ]
        memberships.extend(
            Membership(user_id=uid, group_id=GROUP_ID, status=MembershipStatus(status))
            for uid, status in statuses.items()
        )
        return memberships

    return _make


@pytest.fixture
def memberships(make_memberships, alice, bob, carol) -> List[Membership]:
    """Alice, Bob and Carol are all active"""
    return make_memberships(alice, bob, carol)


@pytest.fixture
def membership_payload(memberships) -> List[dict]:
    """Memberships as JSON for request bodies"""
    return [m.model_dump(mode="json") for m in memberships]


@pytest_asyncio.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Create test client talking to the app in-process"""
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as ac:
        yield ac
