from pydantic import ConfigDict, EmailStr, Field
from typing import Optional

from loanlink.core.schemas import CamelModel
from loanlink.modules.applications.models import ApplicationStage, ApplicationStatus


class ApplicationCreate(CamelModel):
    """Borrower's application; loan snapshot and personal details ride along as extras"""
    model_config = ConfigDict(extra="allow")

    loan_id: str = Field(..., min_length=1)
    borrower_email: Optional[EmailStr] = None


class ApplicationStatusUpdate(CamelModel):
    status: ApplicationStatus


class ApplicationStageUpdate(CamelModel):
    stage: ApplicationStage
