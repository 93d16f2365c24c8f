# routers/__init__.py
from fastapi import HTTPException

from services.errors import BillingError


def http_error(exc: BillingError) -> HTTPException:
     """Translate a service-layer error into the HTTP response for it."""
     return HTTPException(status_code=exc.status_code, detail=exc.to_detail())
