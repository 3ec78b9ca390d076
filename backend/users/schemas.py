# backend/users/schemas.py

from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator


class ProfileUpdateSchema(BaseModel):
    name: Optional[str] = Field(None, max_length=100)
    email: Optional[EmailStr] = None
    bio: Optional[str] = None
    phone: Optional[str] = Field(None, max_length=32)
    avatar: Optional[str] = Field(None, max_length=500)

    @field_validator("name", "bio", "phone", mode="before")
    @classmethod
    def _strip(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("name")
    @classmethod
    def _name_not_empty(cls, v):
        if v is not None and not v:
            raise ValueError("Name cannot be empty")
        return v

    @field_validator("email")
    @classmethod
    def _lower_email(cls, v):
        return v.lower() if v else v
