# contenthub/schemas/client.py
from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional
from datetime import date, datetime
from contenthub.schemas.validators import require_text

# Request schemas
class ClientCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    company: str = Field(..., min_length=1, max_length=255)
    phone: Optional[str] = Field(None, max_length=50)

    @field_validator("name", "company")
    @classmethod
    def not_blank(cls, value):
        return require_text(value)

class ClientUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    company: Optional[str] = Field(None, min_length=1, max_length=255)
    phone: Optional[str] = Field(None, max_length=50)

    # Only runs for fields present in the payload; explicit nulls are rejected
    @field_validator("name", "company")
    @classmethod
    def not_blank(cls, value):
        return require_text(value)

# Response schemas
class ClientResponse(BaseModel):
    id: int
    name: str
    email: str
    company: str
    phone: Optional[str]
    # Placeholder, projects reference clients by company name only
    projects: list[int] = []
    created_date: Optional[date]
    created_at: Optional[datetime]
    updated_at: Optional[datetime]

    class Config:
        from_attributes = True

class ClientListResponse(BaseModel):
    clients: list[ClientResponse]
    total: int
