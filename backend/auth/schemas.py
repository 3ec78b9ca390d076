# backend/auth/schemas.py

from pydantic import BaseModel, EmailStr, Field, field_validator


class RegisterSchema(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(min_length=6, description="Plain-text password, hashed before storage")

    @field_validator("name", mode="before")
    @classmethod
    def _strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("email")
    @classmethod
    def _lower_email(cls, v):
        return v.lower()


class LoginSchema(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def _lower_email(cls, v):
        return v.lower()
