from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional

from ..database import get_db
from ..schemas.auth import CurrentUser
from ..schemas.medicine import (
    MedicineCreate, MedicineUpdate, MedicineEnvelope, MedicineListEnvelope,
    TransactionCreate, TransactionEnvelope, TransactionListEnvelope
)
from ..services import medicine as medicine_service
from ..utils.deps import get_current_user
from ..utils.errors import failure_boundary

router = APIRouter(prefix="/medicine", tags=["medicine"])
transactions_router = APIRouter(prefix="/medicine-transactions", tags=["medicine"])

#Add a medicine to the inventory
@router.post("", response_model=MedicineEnvelope)
def add_medicine(
    medicine_data: MedicineCreate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    with failure_boundary("create medicine", db):
        medicine = medicine_service.add_medicine(db, medicine_data)
    return MedicineEnvelope(medicine=medicine)

#Inventory list with search and the low-stock / expired views
@router.get("", response_model=MedicineListEnvelope)
def list_medicines(
    search: Optional[str] = None,
    category: Optional[str] = None,
    low_stock: Optional[bool] = None,
    expired: Optional[bool] = None,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    with failure_boundary("get medicines", db):
        medicines = medicine_service.list_medicines(
            db, search=search, category=category, low_stock=low_stock, expired=expired
        )
    return MedicineListEnvelope(medicines=medicines)


@router.get("/{medicine_id}", response_model=MedicineEnvelope)
def get_medicine(
    medicine_id: str,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    with failure_boundary("get medicine", db):
        medicine = medicine_service.get_medicine(db, medicine_id)
    return MedicineEnvelope(medicine=medicine)

#Edit descriptive fields; stock moves through /medicine-transactions
@router.put("/{medicine_id}", response_model=MedicineEnvelope)
def update_medicine(
    medicine_id: str,
    medicine_update: MedicineUpdate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    with failure_boundary("update medicine", db):
        medicine = medicine_service.update_medicine(db, medicine_id, medicine_update)
    return MedicineEnvelope(medicine=medicine)

#Stock in / stock out
@transactions_router.post("", response_model=TransactionEnvelope)
def record_transaction(
    transaction_data: TransactionCreate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """Apply a stock movement and append it to the ledger."""
    with failure_boundary("create transaction", db):
        transaction, new_stock = medicine_service.record_transaction(
            db, transaction_data, created_by=current_user.id
        )
    return TransactionEnvelope(transaction=transaction, new_stock=new_stock)

#Ledger, most recent first
@transactions_router.get("", response_model=TransactionListEnvelope)
def list_transactions(
    limit: Optional[int] = Query(None, ge=1, le=500),
    medicine_id: Optional[str] = None,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    with failure_boundary("get transactions", db):
        transactions = medicine_service.list_transactions(db, limit=limit, medicine_id=medicine_id)
    return TransactionListEnvelope(transactions=transactions)
