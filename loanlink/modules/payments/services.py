import logging
from decimal import Decimal, ROUND_DOWN
from functools import lru_cache
from typing import Any, Dict, Optional

import stripe
from starlette.concurrency import run_in_threadpool

from loanlink.core.config import settings
from loanlink.core.database import Database, to_object_id
from loanlink.core.exceptions import ConfigurationError
from loanlink.modules.applications.services import ApplicationService
from loanlink.modules.payments.schemas import PaymentCreate

logger = logging.getLogger(__name__)


def to_minor_units(amount: Decimal) -> int:
    """Convert a major-unit amount to whole cents, truncating any remainder"""
    return int((Decimal(amount) * 100).to_integral_value(rounding=ROUND_DOWN))


class StripePaymentGateway:
    """
    Thin wrapper over Stripe PaymentIntents.
    Only intent creation is used; the client completes the payment.
    """

    def __init__(self, api_key: str, currency: str = "usd"):
        if not api_key:
            raise ConfigurationError("Payment processor is not configured")
        self.client = stripe.StripeClient(api_key)
        self.currency = currency

    async def create_payment_intent(self, amount_cents: int) -> str:
        intent = await run_in_threadpool(
            self.client.payment_intents.create,
            params={
                "amount": amount_cents,
                "currency": self.currency,
                "payment_method_types": ["card"],
            },
        )
        return intent.client_secret


@lru_cache()
def get_payment_gateway() -> StripePaymentGateway:
    return StripePaymentGateway(settings.STRIPE_SECRET_KEY, settings.PAYMENT_CURRENCY)


class PaymentService:
    """Application fee payments"""

    def __init__(self, db: Database, gateway: Optional[StripePaymentGateway] = None):
        self.db = db
        self.gateway = gateway

    async def create_intent(self, amount: Decimal) -> str:
        if self.gateway is None:
            raise ConfigurationError("Payment processor is not configured")
        amount_cents = to_minor_units(amount)
        client_secret = await self.gateway.create_payment_intent(amount_cents)
        logger.info(f"Created payment intent for {amount_cents} minor units")
        return client_secret

    async def record_payment(self, payment: PaymentCreate):
        """
        Store the payment, then mark the application's fee as paid.

        The two writes are independent: if the second one does not land the
        payment stays recorded and the application keeps its old feeStatus.
        """
        to_object_id(payment.application_id)

        document = payment.model_dump(mode="json", by_alias=True)
        document.pop("_id", None)
        result = await self.db.payments.insert_one(document)

        update = await ApplicationService(self.db).mark_fee_paid(payment.application_id)
        if update.matched_count == 0:
            logger.warning(
                f"Payment {result.inserted_id} recorded for unknown application {payment.application_id}"
            )
        else:
            logger.info(f"Recorded payment {result.inserted_id} for application {payment.application_id}")
        return result

    async def get_payment(self, application_id: str) -> Optional[Dict[str, Any]]:
        return await self.db.payments.find_one({"applicationId": application_id})
