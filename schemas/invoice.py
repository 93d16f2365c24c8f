# schemas/invoice.py
"""
Pydantic schemas for Invoice API request/response validation.
"""
from datetime import date, datetime
from decimal import Decimal
from typing import Dict, List, Optional
from pydantic import BaseModel, Field, ConfigDict

from models.invoice import InvoiceStatus
from models.job import JobStatus
from schemas.payment import PaymentResponse


class InvoiceGenerateRequest(BaseModel):
     """Schema for generating an invoice from unbilled jobs."""
     client_id: int = Field(..., gt=0, description="Client to bill (must belong to the caller)")
     start_date: date = Field(..., description="First job date included (also selects the fiscal year)")
     end_date: date = Field(..., description="Last job date included")
     notes: Optional[str] = Field(None, max_length=2000, description="Free text printed on the invoice")

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "client_id": 1,
                    "start_date": "2025-03-01",
                    "end_date": "2025-03-31",
                    "notes": "March hire charges"
               }
          }
     )


class ClientSummary(BaseModel):
     id: int
     name: str
     email: Optional[str] = None
     contact_no: Optional[str] = None
     company: Optional[str] = None
     address: Optional[str] = None

     model_config = ConfigDict(from_attributes=True)


class DriverSummary(BaseModel):
     id: int
     name: str
     contact_no: Optional[str] = None

     model_config = ConfigDict(from_attributes=True)


class VehicleTypeSummary(BaseModel):
     id: int
     name: str

     model_config = ConfigDict(from_attributes=True)


class VehicleSummary(BaseModel):
     id: int
     registration_no: str
     model: Optional[str] = None
     vehicle_type: Optional[VehicleTypeSummary] = None

     model_config = ConfigDict(from_attributes=True)


class JobResponse(BaseModel):
     """A billed (or billable) job with who drove what."""
     id: int
     client_id: int
     invoice_id: Optional[int] = None
     date: date
     location: Optional[str] = None
     start_time: Optional[str] = None
     rate_per_hour: Optional[Decimal] = None
     amount: Decimal
     status: JobStatus
     driver: Optional[DriverSummary] = None
     vehicle: Optional[VehicleSummary] = None
     vehicle_type: Optional[VehicleTypeSummary] = None

     model_config = ConfigDict(from_attributes=True)


class InvoiceResponse(BaseModel):
     """Schema for a single invoice with its client, jobs and payments."""
     id: int
     invoice_number: str
     client_id: int
     start_date: date
     end_date: date
     subtotal: Decimal
     tax: Decimal
     total_amount: Decimal
     paid_amount: Decimal
     balance_amount: Decimal
     status: InvoiceStatus
     notes: Optional[str] = None
     created_at: datetime

     client: ClientSummary
     jobs: List[JobResponse] = []
     payments: List[PaymentResponse] = []

     model_config = ConfigDict(
          from_attributes=True,
          json_schema_extra={
               "example": {
                    "id": 1,
                    "invoice_number": "HRI/AJM/24-25/1",
                    "client_id": 1,
                    "start_date": "2025-03-01",
                    "end_date": "2025-03-31",
                    "subtotal": "4500.00",
                    "tax": "810.00",
                    "total_amount": "5310.00",
                    "paid_amount": "0.00",
                    "balance_amount": "5310.00",
                    "status": "SENT",
                    "notes": None,
                    "created_at": "2025-04-02T10:30:00",
                    "client": {"id": 1, "name": "Ravi Constructions"},
                    "jobs": [],
                    "payments": []
               }
          }
     )


class InvoiceListItem(BaseModel):
     id: int
     invoice_number: str
     client_id: int
     start_date: date
     end_date: date
     total_amount: Decimal
     paid_amount: Decimal
     balance_amount: Decimal
     status: InvoiceStatus
     created_at: datetime
     client: ClientSummary
     job_count: int = 0
     payment_count: int = 0

     model_config = ConfigDict(from_attributes=True)


class InvoiceListResponse(BaseModel):
     """Schema for paginated invoice list response."""
     invoices: List[InvoiceListItem]
     total: int

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "invoices": [],
                    "total": 0
               }
          }
     )


class UnbilledJobsResponse(BaseModel):
     """Jobs that would be billed for the period, with the resulting totals."""
     jobs: List[JobResponse]
     subtotal: Decimal
     cgst: Decimal
     sgst: Decimal
     tax: Decimal
     total_amount: Decimal


class StatusBucket(BaseModel):
     count: int
     balance_amount: Decimal


class ClientBalanceSummary(BaseModel):
     client_id: int
     client_name: str
     total_invoices: int
     total_billed: Decimal
     total_paid: Decimal
     total_outstanding: Decimal
     by_status: Dict[str, StatusBucket]
