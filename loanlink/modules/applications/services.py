from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from loanlink.core.database import Database, to_object_id
from loanlink.modules.applications.models import ApplicationStage, ApplicationStatus, FeeStatus
from loanlink.modules.applications.schemas import ApplicationCreate


class ApplicationService:
    """Service layer for the applications collection"""

    def __init__(self, db: Database):
        self.db = db

    async def get_applications(
        self,
        borrower_email: Optional[str] = None,
        status: Optional[ApplicationStatus] = None
    ) -> List[Dict[str, Any]]:
        query: Dict[str, Any] = {}
        if borrower_email:
            query["borrowerEmail"] = borrower_email
        if status:
            query["status"] = status.value
        return await self.db.applications.find(query).to_list(length=None)

    async def create_application(self, application: ApplicationCreate, applicant_email: str):
        """New applications always start pending with the fee unpaid"""
        document = application.model_dump(mode="json", by_alias=True, exclude_none=True)
        document.pop("_id", None)
        document.setdefault("borrowerEmail", applicant_email)
        document.update({
            "status": ApplicationStatus.PENDING.value,
            "feeStatus": FeeStatus.UNPAID.value,
            "appliedAt": datetime.now(timezone.utc),
        })
        return await self.db.applications.insert_one(document)

    async def update_status(self, application_id: str, status: ApplicationStatus):
        now = datetime.now(timezone.utc)
        changes: Dict[str, Any] = {"status": status.value, "updatedAt": now}
        if status == ApplicationStatus.APPROVED:
            changes["approvedAt"] = now
        return await self.db.applications.update_one(
            {"_id": to_object_id(application_id)},
            {"$set": changes},
        )

    async def update_stage(self, application_id: str, stage: ApplicationStage):
        return await self.db.applications.update_one(
            {"_id": to_object_id(application_id)},
            {"$set": {"stage": stage.value, "updatedAt": datetime.now(timezone.utc)}},
        )

    async def delete_application(self, application_id: str):
        """Remove the application only while it is still pending"""
        return await self.db.applications.delete_one({
            "_id": to_object_id(application_id),
            "status": ApplicationStatus.PENDING.value,
        })

    async def mark_fee_paid(self, application_id: str):
        return await self.db.applications.update_one(
            {"_id": to_object_id(application_id)},
            {"$set": {"feeStatus": FeeStatus.PAID.value}},
        )
