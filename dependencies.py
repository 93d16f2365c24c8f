# dependencies.py
"""
Shared FastAPI dependencies: caller identity from the bearer JWT.

Tokens are issued by the auth service; here they are only verified.
The payload carries the operator's user id as "id".
"""
import logging

from fastapi import Depends, HTTPException, Request, status
from jose import JWTError, jwt

from config import settings

logger = logging.getLogger(__name__)


def _unauthorized(message: str) -> HTTPException:
     return HTTPException(
          status_code=status.HTTP_401_UNAUTHORIZED,
          detail={"code": "UNAUTHORIZED", "message": message},
          headers={"WWW-Authenticate": "Bearer"},
     )


# Token Auth Dependency
def verify_token(request: Request) -> dict:
     auth = request.headers.get("Authorization")
     if not auth or not auth.startswith("Bearer "):
          raise _unauthorized("Missing token")
     token = auth.split(" ", 1)[1]
     try:
          payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
     except JWTError as e:
          logger.info("Rejected token: %s", e)
          raise _unauthorized("Invalid token")
     return payload


def get_current_user_id(token: dict = Depends(verify_token)) -> int:
     """User id every billing query is scoped by."""
     user_id = token.get("id")
     try:
          return int(user_id)
     except (TypeError, ValueError):
          raise _unauthorized("Token has no user id")
