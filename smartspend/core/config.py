from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    # App settings
    PROJECT_NAME: str = "SmartSpend"
    API_PREFIX: str = "/api"
    DEBUG: bool = Field(default=False)
    LOG_LEVEL: str = Field(default="INFO")
    CORS_ORIGINS: List[str] = Field(default=["http://localhost:3000", "http://localhost:5173"])

    # DynamoDB (authenticated users)
    DYNAMO_REGION: str = Field(default="eu-west-1")
    DYNAMO_USERS_TABLE: str = Field(default="smartspend-users", validation_alias="DYNAMO_TABLE_USERS")
    DYNAMO_EXPENSES_TABLE: str = Field(default="smartspend-expenses", validation_alias="DYNAMO_TABLE_EXPENSES")

    # Guest mode storage (JSON files on the local disk)
    GUEST_STORAGE_DIR: str = Field(default=".smartspend")

    # JWT Authentication
    JWT_SECRET_KEY: str = Field(default="change-me-in-production", validation_alias="JWT_SECRET")
    JWT_ALGORITHM: str = "HS256"
    JWT_ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7  # 7 days

    # Gemini
    GEMINI_API_KEY: str = Field(default="")
    GEMINI_MODEL: str = Field(default="gemini-2.5-flash")


settings = Settings()
