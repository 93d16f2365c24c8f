# models/payment.py
"""
Payment model - money received against an invoice.

Payments are append-only: recording one also moves the invoice's
paid/balance amounts in the same transaction, and neither is edited later.
"""
import enum
from sqlalchemy import Column, Integer, String, Numeric, DateTime, Text, ForeignKey, Enum, CheckConstraint
from sqlalchemy.orm import relationship
from .base import Base, TimestampMixin


class PaymentMethod(str, enum.Enum):
     CASH = "CASH"
     UPI = "UPI"
     BANK_TRANSFER = "BANK_TRANSFER"
     CHEQUE = "CHEQUE"


class Payment(TimestampMixin, Base):
     __tablename__ = "payments"

     id = Column(Integer, primary_key=True, autoincrement=True)
     invoice_id = Column(
          Integer,
          ForeignKey("invoices.id", ondelete="RESTRICT"),  # Prevent delete if payments exist
          nullable=False,
          index=True
     )
     client_id = Column(
          Integer,
          ForeignKey("clients.id"),
          nullable=False,
          index=True
     )

     amount = Column(Numeric(12, 2), nullable=False)
     payment_method = Column(
          Enum(PaymentMethod, name="payment_method", create_constraint=True),
          nullable=False
     )
     reference_no = Column(String(100), nullable=True)  # UPI ref, cheque no, bank UTR
     payment_date = Column(DateTime, nullable=False, index=True)
     notes = Column(Text, nullable=True)

     # Relationships
     invoice = relationship("Invoice", back_populates="payments")
     client = relationship("Client", back_populates="payments")

     __table_args__ = (
          CheckConstraint("amount > 0", name="ck_payments_amount_positive"),
     )

     def __repr__(self):
          return f"<Payment(id={self.id}, invoice_id={self.invoice_id}, amount={self.amount}, method='{self.payment_method.value}')>"
