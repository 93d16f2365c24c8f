# services/invoice_numbering.py
"""
Invoice numbering - sequential numbers per Indian fiscal year.

Numbers look like ``HRI/AJM/25-26/7``: a fixed prefix, the fiscal year
(April 1 - March 31) as ``YY-YY``, and a sequence that restarts at 1 each
year. The next number is derived from the latest invoice in that year.

This module only reads. Two concurrent callers can get the same
candidate; the unique constraint on invoices.invoice_number rejects one
of them and invoice generation retries.
"""
import logging
from datetime import date
from typing import Optional

from sqlalchemy.orm import Session

from config import settings
from models import Invoice

logger = logging.getLogger(__name__)


def fiscal_year_label(day: date) -> str:
     """
     Fiscal year containing `day`, e.g. both 2025-10-01 and 2026-02-15 -> "25-26".
     """
     start_year = day.year if day.month >= 4 else day.year - 1
     return f"{start_year % 100:02d}-{(start_year + 1) % 100:02d}"


def invoice_number_prefix(day: date, prefix: Optional[str] = None) -> str:
     """Prefix shared by every invoice number in the fiscal year of `day`."""
     base = prefix if prefix is not None else settings.INVOICE_NUMBER_PREFIX
     return f"{base}/{fiscal_year_label(day)}/"


def parse_sequence(invoice_number: str) -> Optional[int]:
     """Trailing sequence of an invoice number, or None if it is not an integer."""
     tail = invoice_number.rsplit("/", 1)[-1]
     if not (tail.isascii() and tail.isdigit()):
          return None
     return int(tail)


def next_invoice_number(db: Session, day: date, prefix: Optional[str] = None) -> str:
     """
     Compute the next invoice number for the fiscal year containing `day`.

     Args:
          db: SQLAlchemy database session
          day: Date that picks the fiscal year (invoice generation passes start_date)
          prefix: Override for settings.INVOICE_NUMBER_PREFIX

     Returns:
          Candidate invoice number; not reserved until an invoice is inserted with it
     """
     fy_prefix = invoice_number_prefix(day, prefix)

     last = (
          db.query(Invoice.invoice_number)
          .filter(Invoice.invoice_number.startswith(fy_prefix, autoescape=True))
          .order_by(Invoice.created_at.desc(), Invoice.id.desc())
          .first()
     )

     sequence = 1
     if last is not None:
          last_sequence = parse_sequence(last.invoice_number)
          if last_sequence is not None:
               sequence = last_sequence + 1

     number = f"{fy_prefix}{sequence}"
     logger.debug("Next invoice number candidate: %s", number)
     return number
