# services/invoice_service.py
"""
Invoice Service - Business logic layer for invoice operations.

Generation picks a client's completed, unbilled jobs for a period,
computes GST totals and creates the invoice and the job links in one
transaction:

1. Select unbilled jobs and compute totals
2. Take a candidate number from the numbering service
3. Insert the invoice, then claim the jobs with a conditional UPDATE
   (only rows whose invoice_id is still NULL)
4. Fewer rows claimed than selected means another generator got there
   first: roll back and report a conflict
5. A duplicate invoice number rolls back and retries from step 2,
   up to MAX_NUMBERING_ATTEMPTS times
"""
import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Iterable, List, Optional, Tuple

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload, selectinload

from models import Client, Invoice, Job, Vehicle
from models.invoice import InvoiceStatus
from models.job import JobStatus
from services.errors import (
     ConcurrentClaimConflict,
     InvalidInput,
     NoUnbilledJobs,
     NotFound,
     NumberGenerationExhausted,
)
from services.invoice_numbering import next_invoice_number
from utils.money import Amount, ZERO, round2

logger = logging.getLogger(__name__)

# GST is split evenly into central and state components (9% + 9%)
CGST_RATE = Decimal("0.09")
SGST_RATE = Decimal("0.09")

MAX_NUMBERING_ATTEMPTS = 3

# SQL Server caps a statement at 2100 bound parameters
CLAIM_BATCH_SIZE = 1000


@dataclass(frozen=True)
class InvoiceTotals:
     subtotal: Decimal
     cgst: Decimal
     sgst: Decimal
     tax: Decimal
     total_amount: Decimal


def compute_invoice_totals(amounts: Iterable[Amount]) -> InvoiceTotals:
     """
     Sum job amounts and apply GST, rounding half-up to paisa at every step.

     >>> compute_invoice_totals([Decimal("1000")]).total_amount
     Decimal('1180.00')
     """
     subtotal = ZERO
     for amount in amounts:
          subtotal = round2(subtotal + round2(amount))

     cgst = round2(subtotal * CGST_RATE)
     sgst = round2(subtotal * SGST_RATE)
     tax = round2(cgst + sgst)
     return InvoiceTotals(
          subtotal=subtotal,
          cgst=cgst,
          sgst=sgst,
          tax=tax,
          total_amount=round2(subtotal + tax),
     )


def select_unbilled_jobs(
     db: Session,
     user_id: int,
     client_id: int,
     start_date: date,
     end_date: date
) -> List[Job]:
     """Completed jobs of the client with no invoice, dated within [start_date, end_date]."""
     return (
          db.query(Job)
          .filter(
               Job.user_id == user_id,
               Job.client_id == client_id,
               Job.invoice_id.is_(None),
               Job.status == JobStatus.COMPLETED,
               Job.date >= start_date,
               Job.date <= end_date,
          )
          .order_by(Job.date, Job.id)
          .all()
     )


def _is_invoice_number_collision(exc: IntegrityError) -> bool:
     # SQLite, SQL Server and PostgreSQL all name the column or the
     # uq_invoices_invoice_number constraint in the message.
     return "invoice_number" in str(exc.orig).lower()


class InvoiceService:
     """Service class for invoice-related business logic."""

     @staticmethod
     def _validate_period(client_id: Optional[int], start_date: Optional[date], end_date: Optional[date]) -> None:
          if not client_id or start_date is None or end_date is None:
               raise InvalidInput("Client ID, start date, and end date are required")
          if start_date > end_date:
               raise InvalidInput("Start date must be on or before end date")

     @staticmethod
     def _get_client(db: Session, user_id: int, client_id: int) -> Client:
          client = db.query(Client).filter(
               Client.id == client_id,
               Client.user_id == user_id
          ).first()
          if client is None:
               raise NotFound(f"Client with ID {client_id} not found")
          return client

     @staticmethod
     def generate_invoice(
          db: Session,
          user_id: int,
          client_id: int,
          start_date: date,
          end_date: date,
          notes: Optional[str] = None
     ) -> Invoice:
          """
          Bill every unbilled completed job of a client in a date range.

          Args:
               db: SQLAlchemy database session (committed or rolled back here)
               user_id: Operator that owns the client and jobs
               client_id: Client being billed
               start_date: First job date included; also picks the fiscal year
               end_date: Last job date included
               notes: Free text printed on the invoice

          Returns:
               The committed Invoice with client, jobs and payments loaded

          Raises:
               InvalidInput: Missing fields or start_date after end_date
               NotFound: Client is not one of the caller's
               NoUnbilledJobs: Nothing matches; no invoice is created
               ConcurrentClaimConflict: A selected job was invoiced concurrently
               NumberGenerationExhausted: Every candidate number was taken
          """
          InvoiceService._validate_period(client_id, start_date, end_date)
          InvoiceService._get_client(db, user_id, client_id)

          jobs = select_unbilled_jobs(db, user_id, client_id, start_date, end_date)
          if not jobs:
               raise NoUnbilledJobs("No unbilled jobs found for this period")

          totals = compute_invoice_totals(job.amount for job in jobs)
          job_ids = [job.id for job in jobs]

          for attempt in range(1, MAX_NUMBERING_ATTEMPTS + 1):
               invoice_number = next_invoice_number(db, start_date)
               try:
                    invoice = InvoiceService._create_and_link(
                         db,
                         user_id=user_id,
                         client_id=client_id,
                         invoice_number=invoice_number,
                         start_date=start_date,
                         end_date=end_date,
                         totals=totals,
                         notes=notes,
                         job_ids=job_ids,
                    )
                    db.commit()
               except IntegrityError as exc:
                    db.rollback()
                    if not _is_invoice_number_collision(exc):
                         raise
                    logger.warning(
                         "Invoice number %s already taken (attempt %d of %d)",
                         invoice_number, attempt, MAX_NUMBERING_ATTEMPTS
                    )
                    continue

               logger.info(
                    "Generated invoice %s for client %s: %d jobs, total %s",
                    invoice.invoice_number, client_id, len(job_ids), totals.total_amount
               )
               # Selected jobs still hold invoice_id = NULL in the identity map
               db.expire_all()
               return InvoiceService.get_invoice(db, user_id, invoice.id)

          logger.error(
               "Gave up numbering invoice for client %s after %d attempts",
               client_id, MAX_NUMBERING_ATTEMPTS
          )
          raise NumberGenerationExhausted(
               f"Could not allocate a unique invoice number after {MAX_NUMBERING_ATTEMPTS} attempts"
          )

     @staticmethod
     def _create_and_link(
          db: Session,
          user_id: int,
          client_id: int,
          invoice_number: str,
          start_date: date,
          end_date: date,
          totals: InvoiceTotals,
          notes: Optional[str],
          job_ids: List[int]
     ) -> Invoice:
          """
          Insert the invoice and claim the jobs inside the current transaction.
          Nothing is committed here.
          """
          invoice = Invoice(
               invoice_number=invoice_number,
               user_id=user_id,
               client_id=client_id,
               start_date=start_date,
               end_date=end_date,
               subtotal=totals.subtotal,
               tax=totals.tax,
               total_amount=totals.total_amount,
               paid_amount=ZERO,
               balance_amount=totals.total_amount,
               status=InvoiceStatus.SENT,
               notes=notes or None,
          )
          db.add(invoice)
          db.flush()  # Flush to get the ID and hit the invoice_number constraint

          # Re-check invoice_id at write time; the SELECT above may be stale.
          claimed = 0
          for start in range(0, len(job_ids), CLAIM_BATCH_SIZE):
               batch = job_ids[start:start + CLAIM_BATCH_SIZE]
               claimed += (
                    db.query(Job)
                    .filter(Job.id.in_(batch), Job.invoice_id.is_(None))
                    .update({Job.invoice_id: invoice.id}, synchronize_session=False)
               )
          if claimed != len(job_ids):
               db.rollback()
               logger.warning(
                    "Claim conflict on invoice %s: %d of %d jobs already invoiced",
                    invoice_number, len(job_ids) - claimed, len(job_ids)
               )
               raise ConcurrentClaimConflict(
                    "Some jobs were invoiced by another request; nothing was saved, please retry"
               )
          return invoice

     @staticmethod
     def get_invoice(db: Session, user_id: int, invoice_id: int) -> Invoice:
          """Invoice with client, jobs (driver and vehicle) and payments, scoped to the caller."""
          invoice = (
               db.query(Invoice)
               .options(
                    joinedload(Invoice.client),
                    selectinload(Invoice.jobs).joinedload(Job.driver),
                    selectinload(Invoice.jobs).joinedload(Job.vehicle).joinedload(Vehicle.vehicle_type),
                    selectinload(Invoice.jobs).joinedload(Job.vehicle_type),
                    selectinload(Invoice.payments),
               )
               .filter(Invoice.id == invoice_id, Invoice.user_id == user_id)
               .populate_existing()
               .first()
          )
          if invoice is None:
               raise NotFound(f"Invoice with ID {invoice_id} not found")
          return invoice

     @staticmethod
     def list_invoices(
          db: Session,
          user_id: int,
          status: Optional[str] = None,
          client_id: Optional[int] = None,
          search: str = "",
          limit: int = 10,
          offset: int = 0
     ) -> Tuple[List[Invoice], int]:
          """
          Page through the caller's invoices, newest first.

          `search` matches client name, client company or invoice number
          (case-insensitive). A status of "all" disables the status filter.
          """
          query = db.query(Invoice).filter(Invoice.user_id == user_id)

          if status and status != "all":
               try:
                    query = query.filter(Invoice.status == InvoiceStatus(status))
               except ValueError:
                    raise InvalidInput(f"Unknown invoice status: {status}")

          if client_id:
               query = query.filter(Invoice.client_id == client_id)

          if search:
               # % and _ in the search text are matched literally
               query = query.join(Client, Invoice.client_id == Client.id).filter(
                    or_(
                         Client.name.icontains(search, autoescape=True),
                         Client.company.icontains(search, autoescape=True),
                         Invoice.invoice_number.icontains(search, autoescape=True),
                    )
               )

          total = query.count()
          invoices = (
               query.options(
                    joinedload(Invoice.client),
                    selectinload(Invoice.jobs),
                    selectinload(Invoice.payments),
               )
               .order_by(Invoice.created_at.desc(), Invoice.id.desc())
               .offset(offset)
               .limit(limit)
               .all()
          )
          return invoices, total

     @staticmethod
     def preview_unbilled_jobs(
          db: Session,
          user_id: int,
          client_id: int,
          start_date: date,
          end_date: date
     ) -> Tuple[List[Job], InvoiceTotals]:
          """The jobs and totals generate_invoice would use right now."""
          InvoiceService._validate_period(client_id, start_date, end_date)
          InvoiceService._get_client(db, user_id, client_id)
          jobs = select_unbilled_jobs(db, user_id, client_id, start_date, end_date)
          return jobs, compute_invoice_totals(job.amount for job in jobs)

     @staticmethod
     def client_balance_summary(db: Session, user_id: int, client_id: int) -> dict:
          """
          Billed, collected and outstanding amounts for one client.

          Returns:
               Dictionary with overall totals and a per-status breakdown
          """
          client = InvoiceService._get_client(db, user_id, client_id)
          invoices = db.query(Invoice).filter(
               Invoice.user_id == user_id,
               Invoice.client_id == client_id
          ).all()

          by_status = {}
          for inv in invoices:
               bucket = by_status.setdefault(inv.status.value, {"count": 0, "balance_amount": ZERO})
               bucket["count"] += 1
               bucket["balance_amount"] = round2(bucket["balance_amount"] + inv.balance_amount)

          return {
               "client_id": client.id,
               "client_name": client.name,
               "total_invoices": len(invoices),
               "total_billed": round2(sum((inv.total_amount for inv in invoices), ZERO)),
               "total_paid": round2(sum((inv.paid_amount for inv in invoices), ZERO)),
               "total_outstanding": round2(sum((inv.balance_amount for inv in invoices), ZERO)),
               "by_status": by_status,
          }
