import logging
import re
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from email_validator import EmailNotValidError, validate_email

from loanlink.core.database import Database, to_object_id
from loanlink.modules.users.models import UserStatus
from loanlink.modules.users import schemas

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    """Normalize like EmailStr does on write; unparseable input is returned as is"""
    try:
        return validate_email(email, check_deliverability=False).normalized
    except EmailNotValidError:
        return email


class UserService:
    """Service layer for the users collection"""

    def __init__(self, db: Database):
        self.db = db

    async def get_by_email(self, email: Optional[str]) -> Optional[Dict[str, Any]]:
        if not email:
            return None
        return await self.db.users.find_one({"email": normalize_email(email)})

    async def get_role(self, email: str) -> Dict[str, Any]:
        """Role and status for an email; both None when the user is unknown"""
        user = await self.get_by_email(email)
        if not user:
            return {"role": None, "status": None}
        return {"role": user.get("role"), "status": user.get("status")}

    async def list_users(self, search: Optional[str] = None) -> List[Dict[str, Any]]:
        query: Dict[str, Any] = {}
        if search:
            pattern = {"$regex": re.escape(search), "$options": "i"}
            query = {"$or": [{"name": pattern}, {"email": pattern}]}
        return await self.db.users.find(query).to_list(length=None)

    async def create_user(self, user_in: schemas.UserCreateRequest):
        """
        Insert a user unless the email is already registered.

        Returns the insert result, or None for a duplicate email.
        """
        if await self.get_by_email(user_in.email):
            logger.info(f"User {user_in.email} already exists, skipping insert")
            return None

        document = user_in.model_dump(mode="json", by_alias=True, exclude_none=True)
        document["role"] = user_in.role.value
        document["status"] = UserStatus.ACTIVE.value
        document["createdAt"] = datetime.now(timezone.utc)

        result = await self.db.users.insert_one(document)
        logger.info(f"Created user {user_in.email} with role {user_in.role.value}")
        return result

    async def update_role(self, user_id: str, update: schemas.UserRoleUpdate):
        result = await self.db.users.update_one(
            {"_id": to_object_id(user_id)},
            {"$set": {
                "role": update.role.value,
                "status": update.status.value,
                "suspendReason": update.reason or None,
            }},
        )
        logger.info(
            f"User {user_id} set to role={update.role.value} status={update.status.value} "
            f"(matched {result.matched_count})"
        )
        return result
