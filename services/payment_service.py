# services/payment_service.py
"""
Payment Service - records money received and reconciles invoice balances.

A payment row and the matching invoice update (paid_amount, balance_amount,
status) are written in one transaction. The invoice row is read with
SELECT ... FOR UPDATE so concurrent payments on the same invoice cannot
both pass the balance check.
"""
import logging
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import List, Optional

from sqlalchemy.orm import Session, joinedload

from models import Invoice, Payment
from models.invoice import InvoiceStatus
from models.payment import PaymentMethod
from services.errors import ExceedsBalance, InvalidAmount, InvalidInput, NotFound
from utils.money import Amount, ZERO, is_zero, round2, to_decimal

logger = logging.getLogger(__name__)


def derive_invoice_status(
     paid_amount: Decimal,
     balance_amount: Decimal,
     prior_status: InvoiceStatus
) -> InvoiceStatus:
     """
     Status after a balance change.

     - balance within a paisa of zero -> PAID
     - something paid and something still owed -> PARTIAL
     - otherwise the prior status is kept
     """
     if is_zero(balance_amount):
          return InvoiceStatus.PAID
     if paid_amount > 0 and balance_amount > 0:
          return InvoiceStatus.PARTIAL
     return prior_status


def _utcnow() -> datetime:
     # payment_date is a naive UTC column
     return datetime.now(timezone.utc).replace(tzinfo=None)


def _parse_amount(amount: Amount) -> Decimal:
     try:
          value = to_decimal(amount)
     except (InvalidOperation, TypeError, ValueError):
          raise InvalidInput(f"Invalid payment amount: {amount!r}")
     if not value.is_finite():
          raise InvalidInput(f"Invalid payment amount: {amount!r}")
     # Stored as-is: sub-paisa amounts are refused, never rounded
     if value != round2(value):
          raise InvalidInput(f"Payment amount has more than two decimal places: {amount}")
     return round2(value)


def _parse_method(payment_method) -> PaymentMethod:
     try:
          return PaymentMethod(payment_method)
     except ValueError:
          raise InvalidInput(f"Unsupported payment method: {payment_method}")


class PaymentService:
     """Service class for payment recording and lookups."""

     @staticmethod
     def record_payment(
          db: Session,
          user_id: int,
          invoice_id: int,
          client_id: int,
          amount: Amount,
          payment_method,
          reference_no: Optional[str] = None,
          payment_date: Optional[datetime] = None,
          notes: Optional[str] = None
     ) -> Payment:
          """
          Record a payment against an invoice and update its balance.

          Checks run in this order and the first failure wins:
          required fields, invoice visibility, amount > 0, amount <= balance.

          Args:
               db: SQLAlchemy database session (committed here on success)
               user_id: Operator that owns the invoice
               invoice_id: Invoice being paid
               client_id: Must be the invoice's client
               amount: Amount received; at most two decimal places
               payment_method: One of PaymentMethod
               reference_no: UPI ref / cheque no / bank UTR
               payment_date: When the money was received (defaults to now)
               notes: Free text

          Returns:
               The created Payment

          Raises:
               InvalidInput, NotFound, InvalidAmount, ExceedsBalance
          """
          if invoice_id is None or client_id is None or amount is None or payment_method is None:
               raise InvalidInput("Invoice ID, client ID, amount, and payment method are required")

          amount = _parse_amount(amount)
          method = _parse_method(payment_method)

          invoice = (
               db.query(Invoice)
               .filter(
                    Invoice.id == invoice_id,
                    Invoice.client_id == client_id,
                    Invoice.user_id == user_id,
               )
               .with_for_update()
               .populate_existing()
               .first()
          )
          if invoice is None:
               raise NotFound("Invoice not found")

          if amount <= 0:
               raise InvalidAmount("Payment amount must be greater than zero")

          balance = round2(invoice.balance_amount)
          if amount > balance:
               raise ExceedsBalance(
                    f"Payment amount {amount} exceeds balance amount {balance}"
               )

          if method != PaymentMethod.CASH and not reference_no:
               logger.warning(
                    "%s payment on invoice %s recorded without a reference number",
                    method.value, invoice.invoice_number
               )

          payment = Payment(
               invoice_id=invoice.id,
               client_id=client_id,
               amount=amount,
               payment_method=method,
               reference_no=reference_no or None,
               payment_date=payment_date or _utcnow(),
               notes=notes or None,
          )
          db.add(payment)

          new_paid = round2(invoice.paid_amount + amount)
          new_balance = round2(balance - amount)
          if is_zero(new_balance):
               new_balance = ZERO

          prior_status = invoice.status
          invoice.paid_amount = new_paid
          invoice.balance_amount = new_balance
          invoice.status = derive_invoice_status(new_paid, new_balance, prior_status)

          db.flush()
          db.commit()

          logger.info(
               "Recorded %s payment of %s on invoice %s: balance %s, status %s -> %s",
               method.value, amount, invoice.invoice_number, new_balance,
               prior_status.value, invoice.status.value
          )
          return payment

     @staticmethod
     def list_payments(
          db: Session,
          user_id: int,
          invoice_id: Optional[int] = None,
          client_id: Optional[int] = None
     ) -> List[Payment]:
          """Payments on the caller's invoices, most recent payment_date first."""
          query = (
               db.query(Payment)
               .join(Invoice, Payment.invoice_id == Invoice.id)
               .filter(Invoice.user_id == user_id)
          )
          if invoice_id:
               query = query.filter(Payment.invoice_id == invoice_id)
          if client_id:
               query = query.filter(Payment.client_id == client_id)

          return (
               query.options(joinedload(Payment.invoice), joinedload(Payment.client))
               .order_by(Payment.payment_date.desc(), Payment.id.desc())
               .all()
          )
