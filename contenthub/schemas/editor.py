# contenthub/schemas/editor.py
from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional
from datetime import datetime
from contenthub.schemas.validators import require_text

# Request schemas
class EditorCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    timezone: Optional[str] = Field(None, max_length=100, description="e.g. GMT+7 (WIB)")
    country: Optional[str] = Field(None, max_length=100)
    is_active: bool = True

    @field_validator("name")
    @classmethod
    def not_blank(cls, value):
        return require_text(value)

class EditorUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    timezone: Optional[str] = Field(None, max_length=100)
    country: Optional[str] = Field(None, max_length=100)
    is_active: Optional[bool] = None

    @field_validator("name")
    @classmethod
    def not_blank(cls, value):
        return require_text(value)

# Response schemas
class EditorResponse(BaseModel):
    id: int
    name: str
    email: Optional[str]
    timezone: Optional[str]
    country: Optional[str]
    is_active: bool
    created_at: Optional[datetime]
    updated_at: Optional[datetime]

    class Config:
        from_attributes = True

class EditorListResponse(BaseModel):
    editors: list[EditorResponse]
    total: int
