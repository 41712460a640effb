# Loans module
from loanlink.modules.loans.schemas import LoanCreate, LoanUpdate
from loanlink.modules.loans.services import LoanService

__all__ = ["LoanCreate", "LoanUpdate", "LoanService"]
