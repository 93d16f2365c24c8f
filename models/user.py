# models/user.py
from sqlalchemy import Column, Integer, String, Boolean
from sqlalchemy.orm import relationship
from .base import Base, TimestampMixin


class User(TimestampMixin, Base):
     """
     User model - the fleet operator account that owns all billing data.
     Rows are written by the auth service; billing only reads them and
     scopes every query by users.id.
     """
     __tablename__ = "users"

     id = Column(Integer, primary_key=True, autoincrement=True)
     email = Column(String(255), unique=True, nullable=False, index=True)
     password = Column(String(255), nullable=False)
     name = Column(String(100), nullable=False)
     company_name = Column(String(200), nullable=True)
     contact_no = Column(String(50), nullable=True)
     is_active = Column(Boolean, default=True, nullable=False)

     # Relationships
     clients = relationship("Client", back_populates="user")
     invoices = relationship("Invoice", back_populates="user")

     def __repr__(self):
          return f"<User(id={self.id}, email='{self.email}')>"
