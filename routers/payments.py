# routers/payments.py
"""
Payments API.

POST /api/payments: record money received against an invoice. The payment
row and the invoice's paid/balance/status update commit together.
GET /api/payments: list payments on the caller's invoices.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import get_current_user_id
from models import Payment
from routers import http_error
from schemas.payment import PaymentCreate, PaymentListItem, PaymentResponse
from services.errors import BillingError
from services.payment_service import PaymentService

router = APIRouter(prefix="/api/payments", tags=["payments"])


@router.post(
     "",
     response_model=PaymentResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Record a payment",
)
def record_payment(
     body: PaymentCreate,
     db: Session = Depends(get_session),
     user_id: int = Depends(get_current_user_id),
):
     """
     Record a full or partial payment.

     1. Validates the invoice belongs to the caller and the given client.
     2. Rejects non-positive amounts and amounts above the current balance.
     3. Stores the payment and moves the invoice to PARTIAL or PAID.
     """
     try:
          payment = PaymentService.record_payment(
               db,
               user_id=user_id,
               invoice_id=body.invoice_id,
               client_id=body.client_id,
               amount=body.amount,
               payment_method=body.payment_method,
               reference_no=body.reference_no,
               payment_date=body.payment_date,
               notes=body.notes,
          )
     except BillingError as e:
          raise http_error(e)

     return PaymentResponse.model_validate(payment)


@router.get(
     "",
     response_model=List[PaymentListItem],
     summary="List payments",
)
def list_payments(
     invoice_id: Optional[int] = Query(None, description="Filter by invoice ID"),
     client_id: Optional[int] = Query(None, description="Filter by client ID"),
     db: Session = Depends(get_session),
     user_id: int = Depends(get_current_user_id),
):
     payments = PaymentService.list_payments(
          db, user_id, invoice_id=invoice_id, client_id=client_id
     )
     return [_build_list_item(payment) for payment in payments]


def _build_list_item(payment: Payment) -> PaymentListItem:
     return PaymentListItem(
          **PaymentResponse.model_validate(payment).model_dump(),
          invoice_number=payment.invoice.invoice_number,
          client_name=payment.client.name,
     )
