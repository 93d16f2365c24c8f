# models/job.py
import enum
from sqlalchemy import Column, Integer, String, Numeric, Date, ForeignKey, Enum
from sqlalchemy.orm import relationship
from .base import Base, TimestampMixin


class JobStatus(str, enum.Enum):
     """Lifecycle of a hire engagement."""
     PENDING = "PENDING"
     IN_PROGRESS = "IN_PROGRESS"
     COMPLETED = "COMPLETED"
     CANCELLED = "CANCELLED"


class Job(TimestampMixin, Base):
     """
     Job model - one vehicle-for-hire engagement for a client.

     A COMPLETED job with no invoice_id is unbilled. invoice_id is set once,
     by invoice generation, and is not cleared by billing.
     """
     __tablename__ = "jobs"

     id = Column(Integer, primary_key=True, autoincrement=True)

     # Foreign keys
     user_id = Column(
          Integer,
          ForeignKey("users.id", ondelete="CASCADE"),
          nullable=False,
          index=True
     )
     client_id = Column(
          Integer,
          ForeignKey("clients.id"),
          nullable=False,
          index=True
     )
     driver_id = Column(Integer, ForeignKey("drivers.id"), nullable=True)
     vehicle_id = Column(Integer, ForeignKey("vehicles.id"), nullable=True)
     vehicle_type_id = Column(Integer, ForeignKey("vehicle_types.id"), nullable=True)
     invoice_id = Column(
          Integer,
          ForeignKey("invoices.id"),
          nullable=True,
          index=True
     )

     # Job details
     location = Column(String(255), nullable=True)
     date = Column(Date, nullable=False, index=True)
     start_time = Column(String(10), nullable=True)
     rate_per_hour = Column(Numeric(12, 2), nullable=True)
     amount = Column(Numeric(12, 2), nullable=False)
     status = Column(
          Enum(JobStatus, name="job_status", create_constraint=True),
          default=JobStatus.PENDING,
          nullable=False,
          index=True
     )

     # Relationships
     client = relationship("Client", back_populates="jobs")
     driver = relationship("Driver", back_populates="jobs")
     vehicle = relationship("Vehicle", back_populates="jobs")
     vehicle_type = relationship("VehicleType")
     invoice = relationship("Invoice", back_populates="jobs")

     def __repr__(self):
          return f"<Job(id={self.id}, amount={self.amount}, status='{self.status.value}', invoice_id={self.invoice_id})>"
