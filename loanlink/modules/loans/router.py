from fastapi import APIRouter, Depends, HTTPException
from typing import Optional

from loanlink.core.database import Database, get_db, serialize_document
from loanlink.core.dependencies import RequestContext, manager_required
from loanlink.core.schemas import DeleteResultResponse, InsertResultResponse, UpdateResultResponse
from loanlink.modules.loans.schemas import LoanCreate, LoanUpdate
from loanlink.modules.loans.services import LoanService

router = APIRouter(prefix="/loans", tags=["loans"])


@router.get("")
async def read_loans(
    search: Optional[str] = None,
    category: Optional[str] = None,
    home: Optional[str] = None,
    db: Database = Depends(get_db)
):
    """
    List loans.

    - ``search`` matches the title, case-insensitively
    - ``category`` must match exactly
    - ``home=true`` keeps only home page loans, at most six; any other value is ignored
    """
    loans = await LoanService(db).get_loans(search=search, category=category, home=(home == "true"))
    return serialize_document(loans)


@router.get("/{loan_id}")
async def read_loan(loan_id: str, db: Database = Depends(get_db)):
    """Single loan, or null when it does not exist"""
    return serialize_document(await LoanService(db).get_loan(loan_id))


@router.post("", response_model=InsertResultResponse)
async def create_loan(
    loan: LoanCreate,
    context: RequestContext = Depends(manager_required)
):
    result = await LoanService(context.db).create_loan(loan)
    return InsertResultResponse.from_result(result)


@router.put("/{loan_id}", response_model=UpdateResultResponse)
async def update_loan(
    loan_id: str,
    loan_in: LoanUpdate,
    context: RequestContext = Depends(manager_required)
):
    """Update the supplied fields; an unknown id creates the loan"""
    try:
        result = await LoanService(context.db).upsert_loan(loan_id, loan_in)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return UpdateResultResponse.from_result(result)


@router.delete("/{loan_id}", response_model=DeleteResultResponse)
async def delete_loan(
    loan_id: str,
    context: RequestContext = Depends(manager_required)
):
    result = await LoanService(context.db).delete_loan(loan_id)
    return DeleteResultResponse.from_result(result)
