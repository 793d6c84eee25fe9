from pydantic import BaseModel, Field
from decimal import Decimal
from typing import Optional

class JournalLineBase(BaseModel):
    account_no: Optional[int] = None
    account_name: Optional[str] = None
    account_ref: Optional[str] = Field(None, pattern=r"^[0-9a-fA-F]{24}$")
    debit: Decimal = Field(Decimal("0"), ge=0, decimal_places=2)
    credit: Decimal = Field(Decimal("0"), ge=0, decimal_places=2)

class JournalLineCreate(JournalLineBase):
    pass

class JournalLine(JournalLineBase):
    id: str = Field(serialization_alias="_id")
    debit: float
    credit: float

    class Config:
        from_attributes = True
