# Payments module
from loanlink.modules.payments.services import (
    PaymentService, StripePaymentGateway, get_payment_gateway, to_minor_units
)

__all__ = ["PaymentService", "StripePaymentGateway", "get_payment_gateway", "to_minor_units"]
