from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    AMADEUS_CLIENT_ID: str
    AMADEUS_CLIENT_SECRET: str
    AMADEUS_HOSTNAME: str = "test"  # "test" or "production"

    # Search defaults applied when the caller leaves them out
    DEFAULT_CURRENCY: str = "KWD"
    DEFAULT_MAX_RESULTS: int = 5

    ENV: str = "development"
    LOG_LEVEL: str = "INFO"
    PORT: int = 3000

    # Comma separated, e.g. "http://localhost:3000,https://chat.example.com"
    CORS_ORIGINS: str = "*"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    @property
    def cors_origin_list(self) -> list[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

settings = Settings()
