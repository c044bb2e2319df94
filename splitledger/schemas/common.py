"""Common schemas used across multiple modules"""
from typing import List

from pydantic import BaseModel

from splitledger.models.membership import Membership


class HealthResponse(BaseModel):
    status: str


class MembershipSnapshot(BaseModel):
    """Current memberships sent along with a write or read request"""
    memberships: List[Membership] = []
