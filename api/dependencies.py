"""
API dependencies - gateway and service providers
"""
from functools import lru_cache

from fastapi import Depends

from application.ports.payment_gateway import PaymentGateway
from application.services.payment_service import PaymentService
from infrastructure.external.payments import get_payment_gateway


@lru_cache(maxsize=1)
def get_gateway() -> PaymentGateway:
    # One client per process so the provider login happens once
    return get_payment_gateway()


def get_payment_service(gateway: PaymentGateway = Depends(get_gateway)) -> PaymentService:
    return PaymentService(gateway=gateway)
