from sqlalchemy import Column, String, Integer, Date, Text, DateTime, ForeignKey, Enum, CheckConstraint
from sqlalchemy.orm import relationship
import enum
from datetime import date
from ..database import Base
from .student import new_id, utcnow


class MedicineUnit(enum.Enum):
    TABLETS = "tablets"
    CAPSULES = "capsules"
    ML = "ml"
    BOTTLES = "bottles"
    BOXES = "boxes"
    PIECES = "pieces"


class TransactionType(enum.Enum):
    IN = "in"
    OUT = "out"


class Medicine(Base):
    __tablename__ = "medicines"
    __table_args__ = (
        CheckConstraint("stock >= 0", name="ck_medicines_stock_non_negative"),
        CheckConstraint("minimum_stock >= 0", name="ck_medicines_minimum_stock_non_negative"),
    )

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String, nullable=False, index=True)
    category = Column(String, index=True)
    stock = Column(Integer, nullable=False, default=0)
    unit = Column(Enum(MedicineUnit), nullable=False, default=MedicineUnit.TABLETS)
    minimum_stock = Column(Integer, nullable=False, default=10)
    expiry_date = Column(Date)
    description = Column(Text)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    transactions = relationship("MedicineTransaction", back_populates="medicine")

    @property
    def is_low_stock(self) -> bool:
        return self.stock <= self.minimum_stock

    @property
    def is_expired(self) -> bool:
        return self.expiry_date is not None and self.expiry_date < date.today()


#Append-only stock ledger
class MedicineTransaction(Base):
    __tablename__ = "medicine_transactions"
    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_medicine_transactions_quantity_positive"),
    )

    id = Column(String(36), primary_key=True, default=new_id)
    medicine_id = Column(String(36), ForeignKey("medicines.id"), nullable=False, index=True)
    type = Column(Enum(TransactionType), nullable=False)
    quantity = Column(Integer, nullable=False)
    notes = Column(Text)
    created_by = Column(String)
    created_at = Column(DateTime(timezone=True), default=utcnow, index=True)

    medicine = relationship("Medicine", back_populates="transactions")

    @property
    def medicine_name(self):
        return self.medicine.name if self.medicine else None
