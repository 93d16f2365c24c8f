# routers/invoices.py
"""
Invoice API routes.

Invoices are generated from a client's completed, unbilled jobs and are
read-only afterwards except for payment reconciliation. Every route is
scoped to the operator identified by the bearer token.
"""
from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import get_current_user_id
from models import Invoice
from routers import http_error
from services.errors import BillingError
from services.invoice_service import InvoiceService
from schemas.invoice import (
     ClientBalanceSummary,
     ClientSummary,
     InvoiceGenerateRequest,
     InvoiceListItem,
     InvoiceListResponse,
     InvoiceResponse,
     JobResponse,
     UnbilledJobsResponse,
)

router = APIRouter(prefix="/api/invoices", tags=["invoices"])


@router.post(
     "/generate",
     response_model=InvoiceResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Generate an invoice from unbilled jobs"
)
def generate_invoice(
     body: InvoiceGenerateRequest,
     db: Session = Depends(get_session),
     user_id: int = Depends(get_current_user_id)
):
     """
     Bill a client's completed, unbilled jobs dated between start_date and end_date.

     - **client_id**: Client being billed
     - **start_date** / **end_date**: Inclusive job date range
     - **notes**: Optional free text

     Totals carry 9% CGST + 9% SGST. The invoice starts as SENT with the
     full total outstanding, and every selected job is linked to it.
     """
     try:
          invoice = InvoiceService.generate_invoice(
               db,
               user_id=user_id,
               client_id=body.client_id,
               start_date=body.start_date,
               end_date=body.end_date,
               notes=body.notes,
          )
     except BillingError as e:
          raise http_error(e)

     return InvoiceResponse.model_validate(invoice)


@router.get(
     "",
     response_model=InvoiceListResponse,
     summary="List invoices with filters"
)
def list_invoices(
     status: Optional[str] = Query(None, description="Filter by status, or 'all'"),
     client_id: Optional[int] = Query(None, description="Filter by client ID"),
     search: str = Query("", description="Client name, company or invoice number"),
     limit: int = Query(10, ge=1, le=100, description="Items per page"),
     offset: int = Query(0, ge=0, description="Items to skip"),
     db: Session = Depends(get_session),
     user_id: int = Depends(get_current_user_id)
):
     """
     Retrieve a page of the caller's invoices, newest first, with the total match count.
     """
     try:
          invoices, total = InvoiceService.list_invoices(
               db,
               user_id=user_id,
               status=status,
               client_id=client_id,
               search=search,
               limit=limit,
               offset=offset,
          )
     except BillingError as e:
          raise http_error(e)

     return InvoiceListResponse(
          invoices=[_build_list_item(inv) for inv in invoices],
          total=total,
     )


@router.get(
     "/unbilled-jobs",
     response_model=UnbilledJobsResponse,
     summary="Preview jobs an invoice would cover"
)
def preview_unbilled_jobs(
     client_id: int = Query(..., gt=0, description="Client ID"),
     start_date: date = Query(..., description="First job date (inclusive)"),
     end_date: date = Query(..., description="Last job date (inclusive)"),
     db: Session = Depends(get_session),
     user_id: int = Depends(get_current_user_id)
):
     """
     Show the jobs and totals that generating an invoice for this period would use.
     Nothing is written.
     """
     try:
          jobs, totals = InvoiceService.preview_unbilled_jobs(
               db, user_id, client_id, start_date, end_date
          )
     except BillingError as e:
          raise http_error(e)

     return UnbilledJobsResponse(
          jobs=[JobResponse.model_validate(job) for job in jobs],
          subtotal=totals.subtotal,
          cgst=totals.cgst,
          sgst=totals.sgst,
          tax=totals.tax,
          total_amount=totals.total_amount,
     )


@router.get(
     "/client/{client_id}/summary",
     response_model=ClientBalanceSummary,
     summary="Get client balance summary"
)
def get_client_balance_summary(
     client_id: int,
     db: Session = Depends(get_session),
     user_id: int = Depends(get_current_user_id)
):
     """
     Billed, paid and outstanding totals for a client, with counts per status.
     """
     try:
          return InvoiceService.client_balance_summary(db, user_id, client_id)
     except BillingError as e:
          raise http_error(e)


@router.get(
     "/{invoice_id}",
     response_model=InvoiceResponse,
     summary="Get invoice by ID"
)
def get_invoice(
     invoice_id: int,
     db: Session = Depends(get_session),
     user_id: int = Depends(get_current_user_id)
):
     """
     Retrieve an invoice with its client, jobs (with driver and vehicle) and payments.
     """
     try:
          invoice = InvoiceService.get_invoice(db, user_id, invoice_id)
     except BillingError as e:
          raise http_error(e)

     return InvoiceResponse.model_validate(invoice)


def _build_list_item(invoice: Invoice) -> InvoiceListItem:
     """
     Helper function to build InvoiceListItem with related counts.
     """
     return InvoiceListItem(
          id=invoice.id,
          invoice_number=invoice.invoice_number,
          client_id=invoice.client_id,
          start_date=invoice.start_date,
          end_date=invoice.end_date,
          total_amount=invoice.total_amount,
          paid_amount=invoice.paid_amount,
          balance_amount=invoice.balance_amount,
          status=invoice.status,
          created_at=invoice.created_at,
          client=ClientSummary.model_validate(invoice.client),
          job_count=len(invoice.jobs),
          payment_count=len(invoice.payments),
     )
