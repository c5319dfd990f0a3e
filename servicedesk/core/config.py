import re

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator

_API_PREFIX = re.compile(r"/api(/|$)", re.IGNORECASE)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="SERVICEDESK_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    ENV: str = Field(default="dev")  # dev|prod

    # Gateway
    API_BASE_URL: str = Field(default="http://localhost:8080")
    PROJECT_API_BASE_URL: str | None = Field(default=None)
    BILLING_API_URL: str | None = Field(default=None)

    # Live progress stream
    SSE_PATH: str = Field(default="/sse/projects/{project_id}")

    # Timeouts (seconds)
    REQUEST_TIMEOUT: float = Field(default=15.0)
    STREAM_TIMEOUT: float | None = Field(default=None)

    # Auth
    STATIC_AUTH_TOKEN: str | None = Field(default=None)
    OAUTH_PROVIDER_PATH: str = Field(default="/oauth2/authorization/{provider}")

    # Workflow defaults
    APPOINTMENT_APPROVED_STATUS: str = Field(default="IN_PROGRESS")
    MESSAGES_PAGE_SIZE: int = Field(default=20)

    @field_validator("API_BASE_URL", "PROJECT_API_BASE_URL", "BILLING_API_URL")
    @classmethod
    def _strip_trailing_slash(cls, v: str | None) -> str | None:
        if v is None:
            return None
        v = v.strip().rstrip("/")
        return v or None

    @property
    def project_base_url(self) -> str:
        return self.PROJECT_API_BASE_URL or self.API_BASE_URL

    @property
    def billing_base_url(self) -> str:
        if self.BILLING_API_URL:
            return self.BILLING_API_URL
        base = self.API_BASE_URL
        # billing routes live under /api on the gateway
        return base if _API_PREFIX.search(base) else f"{base}/api"


settings = Settings()
