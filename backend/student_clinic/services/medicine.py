from datetime import date
from typing import List, Optional, Tuple

from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload

from ..app_logger import get_logger
from ..exceptions import InsufficientStockError, NotFoundError, ValidationError
from ..models.medicine import Medicine, MedicineTransaction, TransactionType
from ..models.student import utcnow
from ..schemas.medicine import MedicineCreate, MedicineUpdate, TransactionCreate

logger = get_logger("medicine")


def add_medicine(db: Session, data: MedicineCreate) -> Medicine:
    if not data.name:
        raise ValidationError("Medicine name is required")
    if data.stock < 0 or data.minimum_stock < 0:
        raise ValidationError("Stock and minimum stock must not be negative")

    medicine = Medicine(**data.model_dump())
    db.add(medicine)
    db.commit()
    db.refresh(medicine)

    logger.info("Added medicine %s (%s) with stock %d", medicine.id, medicine.name, medicine.stock)
    return medicine


def list_medicines(
    db: Session,
    search: Optional[str] = None,
    category: Optional[str] = None,
    low_stock: Optional[bool] = None,
    expired: Optional[bool] = None,
) -> List[Medicine]:
    query = db.query(Medicine)

    if search:
        pattern = f"%{search.strip()}%"
        query = query.filter(or_(Medicine.name.ilike(pattern), Medicine.category.ilike(pattern)))
    if category:
        query = query.filter(Medicine.category == category)

    # Derived views
    if low_stock is not None:
        condition = Medicine.stock <= Medicine.minimum_stock
        query = query.filter(condition if low_stock else ~condition)
    if expired is not None:
        today = date.today()
        if expired:
            query = query.filter(Medicine.expiry_date.isnot(None), Medicine.expiry_date < today)
        else:
            query = query.filter(or_(Medicine.expiry_date.is_(None), Medicine.expiry_date >= today))

    return query.order_by(Medicine.name).all()


def get_medicine(db: Session, medicine_id: str) -> Medicine:
    medicine = db.query(Medicine).filter(Medicine.id == medicine_id).first()
    if not medicine:
        raise NotFoundError("Medicine not found")
    return medicine


def update_medicine(db: Session, medicine_id: str, data: MedicineUpdate) -> Medicine:
    medicine = get_medicine(db, medicine_id)

    update_data = data.model_dump(exclude_unset=True)
    if "name" in update_data and not update_data["name"]:
        raise ValidationError("Medicine name is required")
    for field in ("unit", "minimum_stock"):
        if field in update_data and update_data[field] is None:
            raise ValidationError(f"{field} cannot be empty")

    for field, value in update_data.items():
        setattr(medicine, field, value)
    medicine.updated_at = utcnow()

    db.commit()
    db.refresh(medicine)
    return medicine


def apply_stock_delta(stock: int, direction: TransactionType, quantity: int) -> int:
    """Stock after moving ``quantity`` in ``direction``; never below zero."""
    if quantity <= 0:
        raise ValidationError("Quantity must be greater than zero")
    new_stock = stock + quantity if direction == TransactionType.IN else stock - quantity
    if new_stock < 0:
        raise InsufficientStockError(f"Insufficient stock: {stock} available, {quantity} requested")
    return new_stock


def record_transaction(db: Session, data: TransactionCreate, created_by: str) -> Tuple[MedicineTransaction, int]:
    """Apply a stock movement and append it to the ledger in a single commit.

    The medicine row is locked for the duration where the backend supports
    ``SELECT ... FOR UPDATE``. Nothing is written when the movement would take
    stock below zero.
    """
    medicine = (
        db.query(Medicine)
        .filter(Medicine.id == data.medicine_id)
        .with_for_update()
        .first()
    )
    if not medicine:
        raise NotFoundError("Medicine not found")

    new_stock = apply_stock_delta(medicine.stock, data.type, data.quantity)

    medicine.stock = new_stock
    medicine.updated_at = utcnow()
    transaction = MedicineTransaction(
        medicine_id=medicine.id,
        type=data.type,
        quantity=data.quantity,
        notes=data.notes,
        created_by=created_by,
    )
    db.add(transaction)
    db.commit()
    db.refresh(transaction)

    logger.info(
        "Stock %s of %d for %s (%s): now %d",
        data.type.value, data.quantity, medicine.id, medicine.name, new_stock,
    )
    return transaction, new_stock


def list_transactions(
    db: Session,
    limit: Optional[int] = None,
    medicine_id: Optional[str] = None,
) -> List[MedicineTransaction]:
    query = db.query(MedicineTransaction).options(joinedload(MedicineTransaction.medicine))
    if medicine_id:
        query = query.filter(MedicineTransaction.medicine_id == medicine_id)
    query = query.order_by(MedicineTransaction.created_at.desc())
    if limit:
        query = query.limit(limit)
    return query.all()
