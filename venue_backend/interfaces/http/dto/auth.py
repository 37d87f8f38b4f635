from __future__ import annotations

from pydantic import BaseModel, Field, StrictStr, field_validator


class CredentialsRequestDTO(BaseModel):
    username: StrictStr = Field(min_length=1, max_length=64)
    password: StrictStr = Field(min_length=1, max_length=1024)

    @field_validator("username")
    @classmethod
    def validate_username(cls, value: str) -> str:
        if value != value.strip():
            raise ValueError("Username must not start or end with whitespace")
        return value


class SignupRequestDTO(CredentialsRequestDTO):
    pass


class LoginRequestDTO(CredentialsRequestDTO):
    pass


class SignupSuccessDTO(BaseModel):
    message: str = "User created"


class LoginSuccessDTO(BaseModel):
    message: str = "Login successful"
    token: str
    expires_at: str


class IdentityDTO(BaseModel):
    user_id: int
    username: str
    issued_at: str
    expires_at: str
