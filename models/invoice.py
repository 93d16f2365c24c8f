# models/invoice.py
import enum
from sqlalchemy import Column, Integer, String, Numeric, Date, Text, ForeignKey, Enum, UniqueConstraint
from sqlalchemy.orm import relationship
from .base import Base, TimestampMixin


class InvoiceStatus(str, enum.Enum):
     """Enumeration for invoice payment status."""
     DRAFT = "DRAFT"
     SENT = "SENT"
     PENDING = "PENDING"
     PARTIAL = "PARTIAL"
     PAID = "PAID"
     OVERDUE = "OVERDUE"
     CANCELLED = "CANCELLED"


class Invoice(TimestampMixin, Base):
     """
     Invoice model - GST bill covering a client's completed jobs in a date range.

     subtotal, tax and total_amount are fixed at creation. Payments only
     move paid_amount, balance_amount and status, keeping
     paid_amount + balance_amount == total_amount.
     """
     __tablename__ = "invoices"

     id = Column(Integer, primary_key=True, autoincrement=True)
     invoice_number = Column(String(50), nullable=False)

     # Foreign keys
     user_id = Column(
          Integer,
          ForeignKey("users.id", ondelete="CASCADE"),
          nullable=False,
          index=True
     )
     client_id = Column(
          Integer,
          ForeignKey("clients.id"),
          nullable=False,
          index=True
     )

     # Billing period
     start_date = Column(Date, nullable=False)
     end_date = Column(Date, nullable=False)

     # Amounts
     subtotal = Column(Numeric(12, 2), nullable=False)
     tax = Column(Numeric(12, 2), nullable=False)
     total_amount = Column(Numeric(12, 2), nullable=False)
     paid_amount = Column(Numeric(12, 2), nullable=False, default=0)
     balance_amount = Column(Numeric(12, 2), nullable=False)

     status = Column(
          Enum(InvoiceStatus, name="invoice_status", create_constraint=True),
          default=InvoiceStatus.SENT,
          nullable=False,
          index=True
     )
     notes = Column(Text, nullable=True)

     # Relationships
     user = relationship("User", back_populates="invoices")
     client = relationship("Client", back_populates="invoices")
     jobs = relationship("Job", back_populates="invoice", order_by="Job.date")
     payments = relationship(
          "Payment",
          back_populates="invoice",
          order_by="Payment.payment_date.desc()"
     )

     __table_args__ = (
          # Concurrent generators can compute the same number; this constraint decides.
          UniqueConstraint("invoice_number", name="uq_invoices_invoice_number"),
     )

     def __repr__(self):
          return f"<Invoice(id={self.id}, number='{self.invoice_number}', total={self.total_amount}, status='{self.status.value}')>"
