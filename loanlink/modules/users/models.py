import enum
from typing import Optional


class UserRole(str, enum.Enum):
    """User role enumeration"""
    BORROWER = "borrower"
    MANAGER = "manager"
    ADMIN = "admin"


class UserStatus(str, enum.Enum):
    """User account status"""
    ACTIVE = "active"
    SUSPENDED = "suspended"


ROLE_RANK = {
    UserRole.BORROWER: 1,
    UserRole.MANAGER: 2,
    UserRole.ADMIN: 3,
}


def role_satisfies(role: Optional[str], minimum: UserRole) -> bool:
    """True when ``role`` ranks at or above ``minimum``; unknown roles never do"""
    try:
        have = UserRole(role)
    except ValueError:
        return False
    return ROLE_RANK[have] >= ROLE_RANK[minimum]
