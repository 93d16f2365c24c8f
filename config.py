# config.py
"""
Application settings loaded from the environment.

Values come from process environment variables, with a local `.env`
file loaded first for development.
"""
import os
from typing import List
from urllib.parse import quote_plus

from dotenv import load_dotenv

load_dotenv()


def _build_database_url() -> str:
     """
     Resolve the SQLAlchemy database URL.

     DATABASE_URL wins when set. Otherwise the Azure SQL (MS SQL Server)
     URL is assembled from the DB_* variables for pymssql.
     """
     url = os.getenv("DATABASE_URL")
     if url:
          return url

     server = os.getenv("DB_SERVER")
     port = os.getenv("DB_PORT", "1433")
     user = quote_plus(os.getenv("DB_USER") or "")
     password = quote_plus(os.getenv("DB_PASS") or "")
     name = os.getenv("DB_NAME")
     return f"mssql+pymssql://{user}:{password}@{server}:{port}/{name}"


class Settings:
     # Database
     DATABASE_URL: str = _build_database_url()
     SQL_ECHO: bool = os.getenv("SQL_ECHO", "false").lower() == "true"

     # JWT issued by the auth service
     JWT_SECRET: str = os.getenv("JWT_SECRET", "")
     JWT_ALGORITHM: str = os.getenv("JWT_ALGORITHM", "HS256")

     # HTTP
     CORS_ORIGINS: List[str] = [
          origin.strip()
          for origin in os.getenv("CORS_ORIGINS", "").split(",")
          if origin.strip()
     ]
     PORT: int = int(os.getenv("PORT", "10000"))

     LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

     # Invoice numbers look like HRI/AJM/25-26/14
     INVOICE_NUMBER_PREFIX: str = os.getenv("INVOICE_NUMBER_PREFIX", "HRI/AJM")


settings = Settings()
