from fastapi import APIRouter, Depends
from typing import Optional

from loanlink.core.database import serialize_document
from loanlink.core.dependencies import RequestContext, authenticated, manager_required
from loanlink.core.schemas import DeleteResultResponse, InsertResultResponse, UpdateResultResponse
from loanlink.modules.applications.models import ApplicationStatus
from loanlink.modules.applications.schemas import (
    ApplicationCreate, ApplicationStageUpdate, ApplicationStatusUpdate
)
from loanlink.modules.applications.services import ApplicationService
from loanlink.modules.users.models import UserRole, role_satisfies
from loanlink.modules.users.services import UserService

router = APIRouter(prefix="/applications", tags=["applications"])


@router.get("")
async def read_applications(
    role: Optional[str] = None,
    status: Optional[ApplicationStatus] = None,
    context: RequestContext = Depends(authenticated)
):
    """
    List applications.

    Borrowers only ever see their own; managers and admins see everything
    unless they ask for ``role=borrower``.
    """
    caller = await UserService(context.db).get_by_email(context.email)
    caller_role = caller.get("role") if caller else None

    borrower_email = None
    if role == UserRole.BORROWER.value or not role_satisfies(caller_role, UserRole.MANAGER):
        borrower_email = context.email

    applications = await ApplicationService(context.db).get_applications(
        borrower_email=borrower_email, status=status
    )
    return serialize_document(applications)


@router.post("", response_model=InsertResultResponse)
async def create_application(
    application: ApplicationCreate,
    context: RequestContext = Depends(authenticated)
):
    result = await ApplicationService(context.db).create_application(application, context.email)
    return InsertResultResponse.from_result(result)


@router.patch("/status/{application_id}", response_model=UpdateResultResponse)
async def update_application_status(
    application_id: str,
    update: ApplicationStatusUpdate,
    context: RequestContext = Depends(manager_required)
):
    """Set the decision status; approving also stamps approvedAt"""
    result = await ApplicationService(context.db).update_status(application_id, update.status)
    return UpdateResultResponse.from_result(result)


@router.patch("/stage/{application_id}", response_model=UpdateResultResponse)
async def update_application_stage(
    application_id: str,
    update: ApplicationStageUpdate,
    context: RequestContext = Depends(manager_required)
):
    result = await ApplicationService(context.db).update_stage(application_id, update.stage)
    return UpdateResultResponse.from_result(result)


@router.delete("/{application_id}", response_model=DeleteResultResponse)
async def delete_application(
    application_id: str,
    context: RequestContext = Depends(authenticated)
):
    """Cancel an application; anything no longer pending is left untouched"""
    result = await ApplicationService(context.db).delete_application(application_id)
    return DeleteResultResponse.from_result(result)
