from pydantic import BaseModel, HttpUrl, field_validator

from ._utils.constants import DEFAULT_QUOTE_BASE_URL, DEFAULT_TIMEOUT, DEFAULT_TOKEN_URL


class Config(BaseModel):
    token_url: str = DEFAULT_TOKEN_URL
    quote_base_url: str = DEFAULT_QUOTE_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    debug: bool = False

    @field_validator("token_url", "quote_base_url", mode="before")
    @classmethod
    def validate_url(cls, value: str) -> str:
        url_value = HttpUrl(url=value)
        assert url_value.scheme in ("http", "https"), "Invalid URL"
        return str(value).rstrip("/")

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, value: float) -> float:
        assert value > 0, "timeout must be positive"
        return value
