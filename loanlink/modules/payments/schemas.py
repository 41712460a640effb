from decimal import Decimal
from pydantic import ConfigDict, Field

from loanlink.core.schemas import CamelModel


class PaymentIntentRequest(CamelModel):
    amount: Decimal = Field(..., gt=0, description="Amount in major currency units, e.g. 10.50")


class PaymentIntentResponse(CamelModel):
    client_secret: str


class PaymentCreate(CamelModel):
    """Completed fee payment; processor details such as transactionId are kept as extras"""
    model_config = ConfigDict(extra="allow")

    application_id: str = Field(..., min_length=1)
    amount: float = Field(..., gt=0)
