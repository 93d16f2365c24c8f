# models/__init__.py
from .base import Base
from .user import User
from .client import Client
from .fleet import Driver, VehicleType, Vehicle
from .job import Job, JobStatus
from .invoice import Invoice, InvoiceStatus
from .payment import Payment, PaymentMethod

__all__ = [
     "Base",
     "User",
     "Client",
     "Driver",
     "VehicleType",
     "Vehicle",
     "Job",
     "JobStatus",
     "Invoice",
     "InvoiceStatus",
     "Payment",
     "PaymentMethod",
]
