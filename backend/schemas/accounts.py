from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import datetime

class AccountBase(BaseModel):
    number: int
    name: Optional[str] = None
    description: Optional[str] = None
    type: Optional[str] = None  # Asset, Liability, Equity, Revenue, Expense

class AccountCreate(AccountBase):
    pass

class AccountUpdate(BaseModel):
    number: Optional[int] = None
    name: Optional[str] = None
    description: Optional[str] = None
    type: Optional[str] = None

    @field_validator('number')
    @classmethod
    def validate_number(cls, v):
        # Omitted means unchanged; an explicit null would clear the number
        if v is None:
            raise ValueError("number cannot be null")
        return v

class Account(AccountBase):
    id: str = Field(serialization_alias="_id")
    number: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
