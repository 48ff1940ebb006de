from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    BUSINESS_NAME: str = "Zubo Pets"
    BUSINESS_TIMEZONE: str = "Asia/Kolkata"
    MAX_TIMES_PER_DAY: int = 4

    PETCARE_API_BASE_URL: str | None = None
    PETCARE_API_TOKEN: str | None = None
    PETCARE_API_TIMEOUT_SECONDS: float = 10.0


settings = Settings()
