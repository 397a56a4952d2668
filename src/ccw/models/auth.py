"""Models for the OAuth2 password-grant exchange."""

from datetime import datetime, timedelta
from typing import Optional

from pydantic import BaseModel, ConfigDict, SecretStr


class Credentials(BaseModel):
    """Credentials used for the password grant.

    Never rendered in ``repr``/``str`` output.
    """

    model_config = ConfigDict(frozen=True)

    username: str
    password: SecretStr
    client_id: str
    client_secret: SecretStr

    def missing_fields(self) -> list[str]:
        values = {
            "username": self.username,
            "password": self.password.get_secret_value(),
            "client_id": self.client_id,
            "client_secret": self.client_secret.get_secret_value(),
        }
        return [name for name, value in values.items() if not value]

    def form_data(self) -> dict[str, str]:
        return {
            "grant_type": "password",
            "username": self.username,
            "password": self.password.get_secret_value(),
            "client_id": self.client_id,
            "client_secret": self.client_secret.get_secret_value(),
        }

    def __repr__(self) -> str:
        return "Credentials(***)"

    def __str__(self) -> str:
        return "Credentials(***)"


class AccessToken(BaseModel):
    """Pydantic model for the identity server's token response."""

    access_token: str
    token_type: str = "Bearer"
    expires_in: int = 0
    expires_at: Optional[datetime] = None

    def with_expiry(self, now: datetime) -> "AccessToken":
        return self.model_copy(
            update={"expires_at": now + timedelta(seconds=self.expires_in)}
        )

    def remaining(self, now: datetime) -> timedelta:
        if self.expires_at is None:
            return timedelta(0)
        return self.expires_at - now

    def __repr__(self) -> str:
        return (
            f"AccessToken(token_type={self.token_type!r}, "
            f"expires_at={self.expires_at!r})"
        )


class TokenError(BaseModel):
    error: str = ""
    error_description: str = ""
