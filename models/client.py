# models/client.py
from sqlalchemy import Column, Integer, String, Boolean, Text, ForeignKey
from sqlalchemy.orm import relationship
from .base import Base, TimestampMixin


class Client(TimestampMixin, Base):
     """
     Client model - a customer that hires vehicles and gets invoiced.
     """
     __tablename__ = "clients"

     id = Column(Integer, primary_key=True, autoincrement=True)
     user_id = Column(
          Integer,
          ForeignKey("users.id", ondelete="CASCADE"),
          nullable=False,
          index=True
     )

     name = Column(String(200), nullable=False)
     email = Column(String(255), nullable=True)
     contact_no = Column(String(50), nullable=False)
     company = Column(String(200), nullable=True)
     address = Column(Text, nullable=False)
     is_active = Column(Boolean, default=True, nullable=False)

     # Relationships
     user = relationship("User", back_populates="clients")
     jobs = relationship("Job", back_populates="client")
     invoices = relationship("Invoice", back_populates="client")
     payments = relationship("Payment", back_populates="client")

     def __repr__(self):
          return f"<Client(id={self.id}, name='{self.name}')>"
