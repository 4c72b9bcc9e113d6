"""
Payments API routes.

Thin HTTP surface over PaymentService. Gateway calls block, so the
endpoints are plain ``def`` and run in the threadpool.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends

from api.dependencies import get_payment_service
from application.dtos.payments import (
    CaptureRequest,
    GatewayResponse,
    PurchaseRequest,
    RefundRequest,
    VerifyRequest,
    VoidRequest,
)
from application.services.payment_service import PaymentService
from core.response import success_response
from domain.payment.entity import Money


router = APIRouter(prefix="/payments", tags=["Payments"])


def _result(result: GatewayResponse):
    # Declined operations are still a completed call; the outcome lives in data.success
    message = "Success" if result.success else (result.message or "Declined")
    return success_response(data=result.model_dump(mode="json"), message=message)


@router.post("/purchase", summary="Authorize and capture a card payment")
def purchase(payload: PurchaseRequest, service: PaymentService = Depends(get_payment_service)):
    money = Money(payload.amount, payload.currency)
    return _result(service.purchase(money, payload.card, payload.options))


@router.post("/authorize", summary="Authorize a card payment without capture")
def authorize(payload: PurchaseRequest, service: PaymentService = Depends(get_payment_service)):
    money = Money(payload.amount, payload.currency)
    return _result(service.authorize(money, payload.card, payload.options))


@router.post("/verify", summary="Verify a card with a nominal authorization")
def verify(payload: VerifyRequest, service: PaymentService = Depends(get_payment_service)):
    return _result(service.verify(payload.card, payload.options))


@router.post("/{authorization}/capture", summary="Capture an authorized payment")
def capture(authorization: str, payload: CaptureRequest, service: PaymentService = Depends(get_payment_service)):
    money = Money(payload.amount, payload.currency)
    return _result(service.capture(money, authorization, payload.options))


@router.post("/{authorization}/refund", summary="Refund a captured payment")
def refund(authorization: str, payload: RefundRequest, service: PaymentService = Depends(get_payment_service)):
    money = Money(payload.amount, payload.currency)
    return _result(service.refund(money, authorization, payload.options))


@router.post("/{authorization}/void", summary="Cancel an uncaptured payment")
def void(authorization: str, payload: VoidRequest | None = None, service: PaymentService = Depends(get_payment_service)):
    options = payload.options if payload else None
    return _result(service.void(authorization, options))
