from sqlalchemy import Boolean, Column, Date, DateTime, ForeignKey, Integer, Text, func
from sqlalchemy.orm import relationship

from app.core.database import Base


class Customer(Base):
    __tablename__ = "customer"

    customer_id = Column(Integer, primary_key=True)
    store_id = Column(Integer, nullable=False, index=True)
    address_id = Column(Integer, ForeignKey("address.address_id"), nullable=False, index=True)
    first_name = Column(Text, nullable=False)
    last_name = Column(Text, nullable=False)
    ssn = Column(Text, nullable=True)
    email = Column(Text, nullable=True)
    active = Column(Boolean, nullable=False, default=True)
    create_date = Column(Date, nullable=False, server_default=func.current_date())
    last_update = Column(DateTime, nullable=True, server_default=func.now())

    address = relationship("Address", back_populates="customers")
    payments = relationship("Payment", back_populates="customer")
