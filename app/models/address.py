from sqlalchemy import Column, DateTime, ForeignKey, Integer, Text, func
from sqlalchemy.orm import relationship

from app.core.database import Base


class Address(Base):
    __tablename__ = "address"

    address_id = Column(Integer, primary_key=True)
    address = Column(Text, nullable=False)
    address2 = Column(Text, nullable=True)
    district = Column(Text, nullable=False)
    city_id = Column(Integer, ForeignKey("city.city_id"), nullable=False, index=True)
    postal_code = Column(Text, nullable=True)
    phone = Column(Text, nullable=False)
    last_update = Column(DateTime, nullable=False, server_default=func.now())

    city = relationship("City", back_populates="addresses")
    customers = relationship("Customer", back_populates="address")
    staff = relationship("Staff", back_populates="address")
