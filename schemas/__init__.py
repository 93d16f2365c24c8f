# schemas/__init__.py
from .payment import (
     PaymentCreate,
     PaymentResponse,
     PaymentListItem,
)
from .invoice import (
     InvoiceGenerateRequest,
     InvoiceResponse,
     InvoiceListItem,
     InvoiceListResponse,
     UnbilledJobsResponse,
     ClientBalanceSummary,
)

__all__ = [
     "PaymentCreate",
     "PaymentResponse",
     "PaymentListItem",
     "InvoiceGenerateRequest",
     "InvoiceResponse",
     "InvoiceListItem",
     "InvoiceListResponse",
     "UnbilledJobsResponse",
     "ClientBalanceSummary",
]
