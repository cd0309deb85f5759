"""Settings for the client."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from oneshot.app.constants import (
    DEFAULT_CONNECT_TIMEOUT_SECONDS,
    DEFAULT_TIMEOUT_SECONDS,
    DEFAULT_USER_AGENT,
)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    connect_timeout_seconds: float = Field(
        DEFAULT_CONNECT_TIMEOUT_SECONDS,
        validation_alias="ONESHOT_CONNECT_TIMEOUT_SECONDS",
    )
    timeout_seconds: float = Field(DEFAULT_TIMEOUT_SECONDS, validation_alias="ONESHOT_TIMEOUT_SECONDS")
    user_agent: str = Field(DEFAULT_USER_AGENT, validation_alias="ONESHOT_USER_AGENT")

    # Disabling this turns off certificate and hostname checks for https URLs.
    verify_tls: bool = Field(True, validation_alias="ONESHOT_VERIFY_TLS")

    transport_backend: str = Field("httpx", validation_alias="ONESHOT_TRANSPORT_BACKEND")
