# dashboard/core/models.py
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator


class Claims(BaseModel):
    """
    Typed view over a decoded access token payload.

    Only `user_name` drives access decisions; it holds the role key
    ("admin", "factory1", ...) despite its name.
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    user_id: Optional[str] = Field(default=None, alias="userId")
    role: Optional[str] = None
    user_name: Optional[str] = Field(default=None, alias="userName")
    issued_at: Optional[int] = Field(default=None, alias="iat")
    expires_at: Optional[int] = Field(default=None, alias="exp")

    @field_validator("user_id", mode="before")
    @classmethod
    def _stringify_user_id(cls, value):
        if isinstance(value, int):
            return str(value)
        return value

    @classmethod
    def from_payload(cls, payload: Optional[dict]) -> Optional["Claims"]:
        if payload is None:
            return None
        try:
            return cls.model_validate(payload)
        except ValidationError:
            return None

    def seconds_left(self, now: Optional[int] = None) -> Optional[int]:
        if self.expires_at is None:
            return None
        if now is None:
            now = int(datetime.now(timezone.utc).timestamp())
        return self.expires_at - now

    def is_expired(self, now: Optional[int] = None) -> bool:
        left = self.seconds_left(now)
        return left is not None and left < 0


class RolePermissions(BaseModel):
    model_config = ConfigDict(frozen=True)

    can_access: bool = False
    can_edit: bool = False
    can_delete: bool = False


FULL_ACCESS = RolePermissions(can_access=True, can_edit=True, can_delete=True)
NO_ACCESS = RolePermissions()
