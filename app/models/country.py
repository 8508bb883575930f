from sqlalchemy import Column, DateTime, Integer, Text, func
from sqlalchemy.orm import relationship

from app.core.database import Base


class Country(Base):
    __tablename__ = "country"

    country_id = Column(Integer, primary_key=True)
    country = Column(Text, nullable=False)
    last_update = Column(DateTime, nullable=False, server_default=func.now())

    cities = relationship("City", back_populates="country")
