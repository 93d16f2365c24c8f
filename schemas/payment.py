# schemas/payment.py
"""
Pydantic schemas for the payments API.
"""
from datetime import datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict

from models.payment import PaymentMethod


class PaymentCreate(BaseModel):
     """
     Request body for POST /api/payments.

     The amount must have at most two decimal places. Its sign is not checked
     here: a missing or foreign invoice is reported before a non-positive amount.
     """

     invoice_id: int = Field(..., description="Invoice being paid")
     client_id: int = Field(..., description="Client of the invoice")
     amount: Decimal = Field(
          ...,
          max_digits=12,
          decimal_places=2,
          description="Amount received in rupees and paise; at most the invoice balance",
     )
     payment_method: PaymentMethod = Field(..., description="CASH, UPI, BANK_TRANSFER or CHEQUE")
     reference_no: Optional[str] = Field(
          None,
          max_length=100,
          description="UPI reference, cheque number or bank UTR (expected for non-cash methods)",
     )
     payment_date: Optional[datetime] = Field(None, description="Defaults to now")
     notes: Optional[str] = Field(None, max_length=2000)

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "invoice_id": 1,
                    "client_id": 1,
                    "amount": 2000.00,
                    "payment_method": "UPI",
                    "reference_no": "UPI-431298765012",
                    "payment_date": "2025-04-10T11:00:00",
               }
          }
     )


class PaymentResponse(BaseModel):
     """A recorded payment."""

     id: int
     invoice_id: int
     client_id: int
     amount: Decimal
     payment_method: PaymentMethod
     reference_no: Optional[str] = None
     payment_date: datetime
     notes: Optional[str] = None
     created_at: datetime

     model_config = ConfigDict(from_attributes=True)


class PaymentListItem(PaymentResponse):
     """Payment with the invoice number and client name for listings."""

     invoice_number: str
     client_name: str
