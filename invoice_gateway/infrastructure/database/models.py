"""SQLAlchemy ORM models for the invoicing schema"""

import uuid
from sqlalchemy import BigInteger, CheckConstraint, Column, Date, ForeignKey, String, Text
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


def _new_id() -> str:
    return str(uuid.uuid4())


class UserModel(Base):
    """Application user, password holds a bcrypt hash"""

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(String(255), nullable=False)
    email = Column(Text, nullable=False, unique=True)
    password = Column(Text, nullable=False)


class CustomerModel(Base):
    """Invoiced customer"""

    __tablename__ = "customers"

    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    image_url = Column(String(255), nullable=False)

    invoices = relationship("InvoiceModel", back_populates="customer")


class InvoiceModel(Base):
    """Invoice issued to a customer, amount stored in cents"""

    __tablename__ = "invoices"
    __table_args__ = (CheckConstraint("status IN ('pending', 'paid')", name="ck_invoices_status"),)

    id = Column(String(36), primary_key=True, default=_new_id)
    customer_id = Column(String(36), ForeignKey("customers.id"), nullable=False, index=True)
    amount = Column(BigInteger, nullable=False)
    status = Column(String(255), nullable=False)
    date = Column(Date, nullable=False)

    customer = relationship("CustomerModel", back_populates="invoices")


class RevenueModel(Base):
    """Monthly revenue reference data"""

    __tablename__ = "revenue"

    month = Column(String(4), primary_key=True)
    revenue = Column(BigInteger, nullable=False)
