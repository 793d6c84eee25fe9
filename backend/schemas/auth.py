from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

class GoogleLoginRequest(BaseModel):
    credential: str = Field(..., min_length=1)

class UserOut(BaseModel):
    id: str = Field(serialization_alias="_id")
    email: Optional[str] = None
    name: Optional[str] = None
    picture: Optional[str] = None
    last_login_at: Optional[datetime] = None

    class Config:
        from_attributes = True
