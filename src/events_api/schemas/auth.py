from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator

from src.events_api.schemas.fields import NonEmptyStr, check_password_strength


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1, max_length=100)
    confirm_password: str = Field(min_length=1, max_length=100)
    first_name: NonEmptyStr = Field(max_length=100)
    last_name: NonEmptyStr = Field(max_length=100)
    phone_number: NonEmptyStr = Field(max_length=32)

    @field_validator("password")
    @classmethod
    def validate_password_strength(cls, v: str) -> str:
        return check_password_strength(v)

    @model_validator(mode="after")
    def passwords_match(self) -> "RegisterRequest":
        if self.password != self.confirm_password:
            raise ValueError("Passwords do not match")
        return self


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)


class AuthResponse(BaseModel):
    """Returned by register and login: the user plus a fresh token pair."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    email: str
    access_token: str = Field(alias="accessToken")
    refresh_token: str = Field(alias="refreshToken")


class TokenPairResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    access_token: str = Field(alias="accessToken")
    refresh_token: str = Field(alias="refreshToken")


class RefreshRequest(BaseModel):
    """A missing token is answered with 401, so the field is optional here."""

    model_config = ConfigDict(populate_by_name=True)

    refresh_token: str | None = Field(default=None, alias="refreshToken")


class LogoutRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    refresh_token: str | None = Field(default=None, alias="refreshToken")


class MessageResponse(BaseModel):
    message: str


class ForgotPasswordRequest(BaseModel):
    email: EmailStr


class VerifyResetTokenRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    reset_token: NonEmptyStr = Field(alias="resetToken")


class SetNewPasswordRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    reset_token: NonEmptyStr = Field(alias="resetToken")
    password: str = Field(min_length=1, max_length=100)

    @field_validator("password")
    @classmethod
    def validate_password_strength(cls, v: str) -> str:
        return check_password_strength(v)
