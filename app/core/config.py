from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    database_url: str = Field(alias="DATABASE_URL")
    # Seconds a statement may wait on locks or run before the driver gives up
    database_timeout_seconds: int = Field(default=15, gt=0, alias="DATABASE_TIMEOUT_SECONDS")

    # JWT Configuration
    secret_key: str = Field(alias="SECRET_KEY")
    algorithm: str = Field(default="HS256", alias="ALGORITHM")
    access_token_expire_minutes: int = Field(default=60, alias="ACCESS_TOKEN_EXPIRE_MINUTES")

    # First store user, seeded by migration 001
    first_user_email: str = Field(alias="FIRST_USER_EMAIL")
    first_user_password: str = Field(alias="FIRST_USER_PASSWORD")
    first_user_name: str = Field(default="Store Clerk", alias="FIRST_USER_NAME")

    # Frontend URL, enables CORS for its origin
    frontend_url: str | None = Field(default=None, alias="FRONTEND_URL")

    @field_validator("frontend_url", mode="before")
    @classmethod
    def empty_str_to_none(cls, v: str | None) -> str | None:
        """Convert empty strings to None for optional string fields."""
        if v == "":
            return None
        return v

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


settings = Settings()
