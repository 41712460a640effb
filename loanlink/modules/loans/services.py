import re
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from loanlink.core.database import Database, to_object_id
from loanlink.modules.loans.schemas import LoanCreate, LoanUpdate

HOME_PAGE_LIMIT = 6


class LoanService:
    def __init__(self, db: Database):
        self.db = db

    async def get_loans(
        self,
        search: Optional[str] = None,
        category: Optional[str] = None,
        home: bool = False
    ) -> List[Dict[str, Any]]:
        query: Dict[str, Any] = {}
        if search:
            query["title"] = {"$regex": re.escape(search), "$options": "i"}
        if category:
            query["category"] = category
        if home:
            query["showOnHome"] = True

        cursor = self.db.loans.find(query, limit=HOME_PAGE_LIMIT if home else 0)
        return await cursor.to_list(length=None)

    async def get_loan(self, loan_id: str) -> Optional[Dict[str, Any]]:
        return await self.db.loans.find_one({"_id": to_object_id(loan_id)})

    async def create_loan(self, loan: LoanCreate):
        document = loan.model_dump(mode="json", by_alias=True)
        document.pop("_id", None)
        document["createdAt"] = datetime.now(timezone.utc)
        return await self.db.loans.insert_one(document)

    async def upsert_loan(self, loan_id: str, loan_in: LoanUpdate):
        """Set only the supplied fields, creating the loan if the id is unknown"""
        changes = loan_in.model_dump(mode="json", by_alias=True, exclude_unset=True)
        changes.pop("_id", None)
        if not changes:
            raise ValueError("No loan fields to update")
        return await self.db.loans.update_one(
            {"_id": to_object_id(loan_id)},
            {"$set": changes},
            upsert=True,
        )

    async def delete_loan(self, loan_id: str):
        return await self.db.loans.delete_one({"_id": to_object_id(loan_id)})
