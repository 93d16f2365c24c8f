# services/__init__.py
from .invoice_service import InvoiceService, InvoiceTotals, compute_invoice_totals
from .invoice_numbering import fiscal_year_label, next_invoice_number
from .payment_service import PaymentService, derive_invoice_status

__all__ = [
     "InvoiceService",
     "InvoiceTotals",
     "compute_invoice_totals",
     "fiscal_year_label",
     "next_invoice_number",
     "PaymentService",
     "derive_invoice_status",
]
