from __future__ import annotations

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class RegisterFormDTO(BaseModel):
    """Accepts both the plain field names and the original form's prefixed ones."""

    model_config = ConfigDict(populate_by_name=True)

    username: str = Field(
        "", max_length=64, validation_alias=AliasChoices("username", "register_username")
    )
    password: str = Field("", validation_alias=AliasChoices("password", "register_password"))
    confirm_password: str = Field(
        "",
        validation_alias=AliasChoices(
            "confirmPassword", "confirm_password", "register_confirm_password"
        ),
    )

    @field_validator("username")
    @classmethod
    def _strip_username(cls, value: str) -> str:
        return value.strip()


class LoginFormDTO(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    username: str = Field("", validation_alias=AliasChoices("username", "login_username"))
    password: str = Field("", validation_alias=AliasChoices("password", "login_password"))

    @field_validator("username")
    @classmethod
    def _strip_username(cls, value: str) -> str:
        return value.strip()


class AuthSuccessDTO(BaseModel):
    success: bool = True
