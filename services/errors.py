# services/errors.py
"""
Domain errors raised by the billing services.

Routers translate these into HTTP responses; `code` is the stable value
clients switch on, `status_code` the HTTP status it maps to.
"""
from fastapi import status


class BillingError(Exception):
     """Base class for billing failures that are reported to the caller."""

     code = "BILLING_ERROR"
     status_code = status.HTTP_400_BAD_REQUEST

     def __init__(self, message: str):
          super().__init__(message)
          self.message = message

     def to_detail(self) -> dict:
          return {"code": self.code, "message": self.message}


class InvalidInput(BillingError):
     code = "INVALID_INPUT"
     status_code = status.HTTP_400_BAD_REQUEST


class NotFound(BillingError):
     code = "NOT_FOUND"
     status_code = status.HTTP_404_NOT_FOUND


class NoUnbilledJobs(BillingError):
     """Nothing to invoice for the requested client and period."""
     code = "NO_UNBILLED_JOBS"
     status_code = status.HTTP_404_NOT_FOUND


class InvalidAmount(BillingError):
     code = "INVALID_AMOUNT"
     status_code = status.HTTP_400_BAD_REQUEST


class ExceedsBalance(BillingError):
     code = "EXCEEDS_BALANCE"
     status_code = status.HTTP_400_BAD_REQUEST


class ConcurrentClaimConflict(BillingError):
     """Another invoice claimed one of the selected jobs before we linked them."""
     code = "CONCURRENT_CLAIM_CONFLICT"
     status_code = status.HTTP_409_CONFLICT


class NumberGenerationExhausted(BillingError):
     """Every numbering attempt collided with an existing invoice number."""
     code = "NUMBER_GENERATION_EXHAUSTED"
     status_code = status.HTTP_503_SERVICE_UNAVAILABLE
