"""Group membership model"""
import enum

from pydantic import BaseModel


class MembershipStatus(str, enum.Enum):
    """Enum for membership statuses"""
    ACTIVE = "active"
    PENDING = "pending"
    ARCHIVED = "archived"


class Membership(BaseModel):
    """A user's membership in a group"""

    user_id: str
    group_id: str
    status: MembershipStatus = MembershipStatus.ACTIVE

    @property
    def is_active(self) -> bool:
        return self.status == MembershipStatus.ACTIVE
