from typing import Literal
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import SecretStr, field_validator

AppEnv = Literal["local", "dev", "staging", "prod"]

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # App
    APP_NAME: str = "Invoice Management API"
    APP_VERSION: str = "1.0.0"
    APP_ENV: AppEnv = "local"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    LOG_COLOR: bool = True

    # DB
    DATABASE_URL: SecretStr = SecretStr("")
    DB_SSL: bool = False
    DB_AUTO_CREATE: bool = False

    # -------- validators --------
    @field_validator("DATABASE_URL")
    @classmethod
    def _required_secret(cls, v, info):
        if v is None or (hasattr(v, "get_secret_value") and v.get_secret_value() == ""):
            raise ValueError(f"{info.field_name} is required (set it in .env)")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def _normalize_level(cls, v: str) -> str:
        return (v or "INFO").strip().upper()

settings = Settings()
