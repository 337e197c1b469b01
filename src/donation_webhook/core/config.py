from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"

    # Not needed to verify webhooks; kept so one .env serves the whole deployment
    stripe_secret_key: SecretStr | None = None
    stripe_webhook_secret: SecretStr
    stripe_webhook_tolerance_sec: int = 300

    supabase_url: str
    supabase_service_role_key: SecretStr
    supabase_profiles_table: str = "user_profiles"

    # Thank-you email is skipped when unset
    resend_api_key: SecretStr | None = None
    email_from: str = "Donations <onboarding@resend.dev>"

    http_timeout_sec: float = 10.0

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @field_validator("stripe_webhook_secret", "supabase_service_role_key")
    @classmethod
    def _not_blank(cls, v: SecretStr) -> SecretStr:
        # An empty signing secret would let anyone forge a valid signature
        if not v.get_secret_value().strip():
            raise ValueError("must not be empty")
        return v

    @field_validator("stripe_webhook_tolerance_sec")
    @classmethod
    def _positive_tolerance(cls, v: int) -> int:
        # stripe skips the timestamp check entirely for a tolerance of 0
        if v <= 0:
            raise ValueError("must be greater than 0")
        return v

    @field_validator("supabase_url")
    @classmethod
    def _strip_trailing_slash(cls, v: str) -> str:
        v = v.strip().rstrip("/")
        if not v:
            raise ValueError("must not be empty")
        return v

    @field_validator("resend_api_key")
    @classmethod
    def _blank_means_unset(cls, v: SecretStr | None) -> SecretStr | None:
        if v is not None and not v.get_secret_value().strip():
            return None
        return v

    @property
    def email_enabled(self) -> bool:
        return self.resend_api_key is not None
