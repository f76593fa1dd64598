from pydantic import EmailStr, Field, field_validator
from datetime import datetime
from app.models.base import CamelModel

# bcrypt only hashes the first 72 bytes
MAX_PASSWORD_BYTES = 72

class UserCreate(CamelModel):
    email: EmailStr
    password: str = Field(min_length=6, max_length=MAX_PASSWORD_BYTES)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, v: str) -> str:
        if len(v.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
        return v

class UserLogin(CamelModel):
    email: EmailStr
    password: str

class UserInDB(CamelModel):
    id: int
    email: EmailStr
    password_hash: str
    created_at: datetime

class UserOut(CamelModel):
    id: int
    email: EmailStr
    created_at: datetime
