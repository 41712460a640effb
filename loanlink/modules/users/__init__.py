# Users module
from loanlink.modules.users.models import UserRole, UserStatus, role_satisfies
from loanlink.modules.users.services import UserService

__all__ = ["UserRole", "UserStatus", "role_satisfies", "UserService"]
