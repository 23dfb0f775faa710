from __future__ import annotations

from pydantic import AliasChoices, BaseModel, Field

from userhub.domain.users.entities import User


class StatusFormDTO(BaseModel):
    status: str = Field(validation_alias=AliasChoices("status", "profile__chgStatus"))


class StatusChangedDTO(BaseModel):
    success: bool = True
    new_status: str = Field(serialization_alias="newStatus")


class ProfileDTO(BaseModel):
    username: str
    status: str = ""
    avatar_url: str = Field(serialization_alias="avatarUrl")

    @classmethod
    def from_user(cls, user: User, *, default_avatar_url: str) -> "ProfileDTO":
        return cls(
            username=user.username,
            status=user.status,
            avatar_url=user.avatar or default_avatar_url,
        )
