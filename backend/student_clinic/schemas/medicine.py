from pydantic import BaseModel, Field, validator
from typing import Optional, List
from datetime import date, datetime
from ..models.medicine import MedicineUnit, TransactionType
from ..utils.validators import SecureTextValidator, optional_text


class MedicineBase(BaseModel):
    name: str
    category: Optional[str] = None
    unit: MedicineUnit = MedicineUnit.TABLETS
    minimum_stock: int = Field(10, ge=0)
    expiry_date: Optional[date] = None
    description: Optional[str] = None

    @validator('name')
    def validate_name(cls, v):
        return SecureTextValidator.sanitize_name(v)

    @validator('category')
    def validate_category(cls, v):
        if not v:
            return None
        return SecureTextValidator.sanitize_name(v) or None

    @validator('expiry_date', pre=True)
    def blank_expiry(cls, v):
        return v or None

    @validator('description')
    def validate_description(cls, v):
        return optional_text(v)


class MedicineCreate(MedicineBase):
    stock: int = Field(0, ge=0)

#stock only changes through transactions
class MedicineUpdate(BaseModel):
    name: Optional[str] = None
    category: Optional[str] = None
    unit: Optional[MedicineUnit] = None
    minimum_stock: Optional[int] = Field(None, ge=0)
    expiry_date: Optional[date] = None
    description: Optional[str] = None

    @validator('name', 'category')
    def validate_names(cls, v):
        #blank means "clear"; the service refuses a cleared name
        if not v:
            return None
        return SecureTextValidator.sanitize_name(v) or None

    @validator('description')
    def validate_description(cls, v):
        return optional_text(v)


class MedicineResponse(MedicineBase):
    id: str
    stock: int
    is_low_stock: bool
    is_expired: bool
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class MedicineEnvelope(BaseModel):
    success: bool = True
    medicine: MedicineResponse

class MedicineListEnvelope(BaseModel):
    success: bool = True
    medicines: List[MedicineResponse]


class TransactionCreate(BaseModel):
    medicine_id: str
    type: TransactionType
    quantity: int = Field(..., gt=0)
    notes: Optional[str] = None

    @validator('notes')
    def validate_notes(cls, v):
        return optional_text(v)


class TransactionResponse(BaseModel):
    id: str
    medicine_id: str
    medicine_name: Optional[str] = None
    type: TransactionType
    quantity: int
    notes: Optional[str] = None
    created_by: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


class TransactionEnvelope(BaseModel):
    success: bool = True
    transaction: TransactionResponse
    new_stock: int

class TransactionListEnvelope(BaseModel):
    success: bool = True
    transactions: List[TransactionResponse]
