from pydantic import AliasChoices, BaseModel, ConfigDict, EmailStr, Field
from datetime import datetime


class UserBase(BaseModel):
    email: EmailStr


class UserCreate(UserBase):
    password: str = Field(min_length=6)
    name: str = Field(min_length=2, max_length=255)


class UserLogin(UserBase):
    password: str = Field(min_length=1)


class User(BaseModel):
    """Public user shape; ``name`` is read from ``display_name``."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    name: str = Field(validation_alias=AliasChoices("name", "display_name"))
    created_at: datetime
    updated_at: datetime


class AuthResponse(BaseModel):
    user: User
    token: str
    token_type: str = "bearer"


class TokenData(BaseModel):
    user_id: int
    email: str
