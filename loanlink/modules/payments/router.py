from fastapi import APIRouter, Depends

from loanlink.core.database import serialize_document
from loanlink.core.dependencies import RequestContext, authenticated
from loanlink.core.schemas import InsertResultResponse
from loanlink.modules.payments.schemas import (
    PaymentCreate, PaymentIntentRequest, PaymentIntentResponse
)
from loanlink.modules.payments.services import (
    PaymentService, StripePaymentGateway, get_payment_gateway
)

router = APIRouter(tags=["payments"])


@router.post("/create-payment-intent", response_model=PaymentIntentResponse)
async def create_payment_intent(
    intent: PaymentIntentRequest,
    context: RequestContext = Depends(authenticated),
    gateway: StripePaymentGateway = Depends(get_payment_gateway)
):
    """
    Start a card payment for an application fee.

    Returns the client secret the frontend uses to confirm the payment.
    """
    client_secret = await PaymentService(context.db, gateway).create_intent(intent.amount)
    return PaymentIntentResponse(client_secret=client_secret)


@router.post("/payments", response_model=InsertResultResponse)
async def record_payment(
    payment: PaymentCreate,
    context: RequestContext = Depends(authenticated)
):
    """Store a completed payment and mark the application fee as paid"""
    result = await PaymentService(context.db).record_payment(payment)
    return InsertResultResponse.from_result(result)


@router.get("/payments/{application_id}")
async def read_payment(
    application_id: str,
    context: RequestContext = Depends(authenticated)
):
    """Payment recorded for an application, or null"""
    return serialize_document(await PaymentService(context.db).get_payment(application_id))
