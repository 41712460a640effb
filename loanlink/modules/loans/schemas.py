from pydantic import ConfigDict, Field
from typing import Optional

from loanlink.core.schemas import CamelModel


class LoanBase(CamelModel):
    """Loan listing; terms such as interest rate or EMI plans are free-form extras"""
    model_config = ConfigDict(extra="allow")


class LoanCreate(LoanBase):
    title: str = Field(..., min_length=1)
    category: Optional[str] = None
    show_on_home: bool = False


class LoanUpdate(LoanBase):
    title: Optional[str] = Field(None, min_length=1)
    category: Optional[str] = None
    show_on_home: Optional[bool] = None
