from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, Text, func
from sqlalchemy.orm import relationship

from app.core.database import Base


class Staff(Base):
    __tablename__ = "staff"

    staff_id = Column(Integer, primary_key=True)
    store_id = Column(Integer, nullable=False)
    address_id = Column(Integer, ForeignKey("address.address_id"), nullable=False, index=True)
    first_name = Column(Text, nullable=False)
    last_name = Column(Text, nullable=False)
    email = Column(Text, nullable=True)
    username = Column(Text, nullable=False)
    password = Column(Text, nullable=True)
    active = Column(Boolean, nullable=False, default=True)
    last_update = Column(DateTime, nullable=False, server_default=func.now())

    address = relationship("Address", back_populates="staff")
    payments = relationship("Payment", back_populates="staff")
