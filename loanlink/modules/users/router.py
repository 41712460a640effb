from fastapi import APIRouter, Depends
from typing import Optional

from loanlink.core.database import Database, get_db, serialize_document
from loanlink.core.dependencies import RequestContext, admin_required
from loanlink.core.schemas import InsertResultResponse, UpdateResultResponse
from loanlink.modules.users import schemas
from loanlink.modules.users.services import UserService

router = APIRouter(tags=["users"])


@router.get("/users")
async def list_users(
    search: Optional[str] = None,
    context: RequestContext = Depends(admin_required)
):
    """
    List users, optionally filtered by a case-insensitive name/email search.
    """
    users = await UserService(context.db).list_users(search)
    return serialize_document(users)


@router.get("/user/role/{email}", response_model=schemas.UserRoleResponse)
async def get_user_role(email: str, db: Database = Depends(get_db)):
    """Role and status for an email"""
    return await UserService(db).get_role(email)


@router.post("/users")
async def create_user(
    user_in: schemas.UserCreateRequest,
    db: Database = Depends(get_db)
):
    """
    Register a user.

    - Role defaults to borrower
    - A second registration with the same email inserts nothing
    """
    result = await UserService(db).create_user(user_in)
    if result is None:
        return {"message": "user already exists", "insertedId": None}
    return InsertResultResponse.from_result(result)


@router.patch("/users/role/{user_id}", response_model=UpdateResultResponse)
async def update_user_role(
    user_id: str,
    update: schemas.UserRoleUpdate,
    context: RequestContext = Depends(admin_required)
):
    """Change a user's role, status and suspension reason"""
    result = await UserService(context.db).update_role(user_id, update)
    return UpdateResultResponse.from_result(result)
