# models/fleet.py
"""
Driver, vehicle type and vehicle records.

These are maintained by the fleet CRUD screens. Billing only reads them to
show who drove what on each invoiced job.
"""
from sqlalchemy import Column, Integer, String, Boolean, ForeignKey
from sqlalchemy.orm import relationship
from .base import Base, TimestampMixin


class Driver(TimestampMixin, Base):
     __tablename__ = "drivers"

     id = Column(Integer, primary_key=True, autoincrement=True)
     user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
     name = Column(String(100), nullable=False)
     contact_no = Column(String(50), nullable=True)
     is_active = Column(Boolean, default=True, nullable=False)

     jobs = relationship("Job", back_populates="driver")

     def __repr__(self):
          return f"<Driver(id={self.id}, name='{self.name}')>"


class VehicleType(TimestampMixin, Base):
     # __tablename__ derived by Base: vehicle_types

     id = Column(Integer, primary_key=True, autoincrement=True)
     user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
     name = Column(String(100), nullable=False)
     description = Column(String(500), nullable=True)

     vehicles = relationship("Vehicle", back_populates="vehicle_type")

     def __repr__(self):
          return f"<VehicleType(id={self.id}, name='{self.name}')>"


class Vehicle(TimestampMixin, Base):
     __tablename__ = "vehicles"

     id = Column(Integer, primary_key=True, autoincrement=True)
     user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
     vehicle_type_id = Column(Integer, ForeignKey("vehicle_types.id"), nullable=False)
     registration_no = Column(String(50), nullable=False)
     model = Column(String(100), nullable=True)
     is_active = Column(Boolean, default=True, nullable=False)

     vehicle_type = relationship("VehicleType", back_populates="vehicles")
     jobs = relationship("Job", back_populates="vehicle")

     def __repr__(self):
          return f"<Vehicle(id={self.id}, registration_no='{self.registration_no}')>"
