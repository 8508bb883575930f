from sqlalchemy import Column, DateTime, ForeignKey, Integer, Text, func
from sqlalchemy.orm import relationship

from app.core.database import Base


class City(Base):
    __tablename__ = "city"

    city_id = Column(Integer, primary_key=True)
    city = Column(Text, nullable=False)
    country_id = Column(Integer, ForeignKey("country.country_id"), nullable=False, index=True)
    last_update = Column(DateTime, nullable=False, server_default=func.now())

    country = relationship("Country", back_populates="cities")
    addresses = relationship("Address", back_populates="city")
