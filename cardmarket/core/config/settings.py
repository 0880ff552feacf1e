"""Client settings loaded from the environment.

Env vars use the ``CARDMARKET_`` prefix and double underscore as the
nested delimiter:

    CARDMARKET_HOST=https://sandbox.cardmarket.com/ws/v2.0/output.json
    CARDMARKET_CREDENTIALS__APP_TOKEN=...
    CARDMARKET_OAUTH__SIGNATURE_METHOD=HMAC-SHA1
"""

from pydantic import BaseModel, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from cardmarket.core.config.enums import PayloadFormat, TimestampUnit
from cardmarket.domains.oauth.types import Credentials, OAuthSettings

DEFAULT_HOST = "https://api.cardmarket.com/ws/v2.0/output.json"


class OAuthConfig(BaseModel):
    """OAuth protocol identifiers sent with every request."""

    signature_method: str = Field("HMAC-SHA1", description="oauth_signature_method value")
    version: str = Field("1.0", description="oauth_version value")
    timestamp_unit: TimestampUnit = Field(
        TimestampUnit.MILLISECONDS, description="Unit of oauth_timestamp"
    )


class CredentialsConfig(BaseModel):
    """App and access token pairs issued by the marketplace."""

    app_token: str = Field("", description="Consumer key")
    app_secret: SecretStr = Field(SecretStr(""), description="Consumer secret")
    access_token: str = Field("", description="Access token")
    access_token_secret: SecretStr = Field(SecretStr(""), description="Access token secret")


class Settings(BaseSettings):
    """Cardmarket client settings with automatic env var loading."""

    model_config = SettingsConfigDict(
        env_prefix="CARDMARKET_",
        env_nested_delimiter="__",
        env_file=".env",
        extra="ignore",
    )

    HOST: str = Field(DEFAULT_HOST, description="API base URL, without trailing slash")
    OAUTH: OAuthConfig = Field(default_factory=OAuthConfig)
    CREDENTIALS: CredentialsConfig = Field(default_factory=CredentialsConfig)
    REQUEST_TIMEOUT_SECONDS: float = Field(60.0, description="Per-request timeout")
    PAYLOAD_FORMAT: PayloadFormat = Field(PayloadFormat.XML, description="PUT body format")
    XML_ROOT_TAG: str = Field("request", description="Root element of XML PUT bodies")
    LOG_LEVEL: str = Field("INFO", description="Level of the cardmarket logger")

    @field_validator("HOST")
    @classmethod
    def validate_host(cls, v: str) -> str:
        """Require an absolute http(s) URL without a trailing slash."""
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"HOST must be an http(s) URL, got {v!r}")
        return v.rstrip("/")

    @field_validator("REQUEST_TIMEOUT_SECONDS")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        """Reject non-positive timeouts."""
        if v <= 0:
            raise ValueError("REQUEST_TIMEOUT_SECONDS must be positive")
        return v

    @property
    def credentials(self) -> Credentials:
        """Immutable credential quadruple for the signer."""
        return Credentials(
            app_token=self.CREDENTIALS.app_token,
            app_secret=self.CREDENTIALS.app_secret.get_secret_value(),
            access_token=self.CREDENTIALS.access_token,
            access_token_secret=self.CREDENTIALS.access_token_secret.get_secret_value(),
        )

    @property
    def oauth(self) -> OAuthSettings:
        """OAuth identifiers for the signer."""
        return OAuthSettings(
            signature_method=self.OAUTH.signature_method,
            version=self.OAUTH.version,
        )
