from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, Text
from sqlalchemy.orm import relationship

from app.core.database import Base


class Payment(Base):
    __tablename__ = "payment"

    payment_id = Column(Integer, primary_key=True)
    amount = Column(Numeric(5, 2), nullable=False)
    customer_id = Column(Integer, ForeignKey("customer.customer_id"), nullable=False, index=True)
    staff_id = Column(Integer, ForeignKey("staff.staff_id"), nullable=False, index=True)
    # Tabela rental não é declarada aqui, por isso sem FK
    rental_id = Column(Integer, nullable=True)
    cc_number = Column(Text, nullable=True)
    cc_expiration = Column(Text, nullable=True)
    cc_cvv = Column(Text, nullable=True)
    payment_date = Column(DateTime, nullable=False)

    customer = relationship("Customer", back_populates="payments")
    staff = relationship("Staff", back_populates="payments")
