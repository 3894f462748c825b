# apps/api/app/core/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # App
    APP_NAME: str = "Workforce Scheduling API"
    DEBUG: bool = False
    TZ: str = "UTC"                        # "current month" for GET /shifts
    LOG_LEVEL: str = "INFO"
    CORS_ALLOW_ORIGINS: str = ""           # "https://foo.com,https://bar.com"

    # DB & Auth
    DATABASE_URL: str
    JWT_SECRET: str
    JWT_ALGO: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # .env support; unknown env vars are ignored
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def cors_origins(self) -> list[str]:
        if self.CORS_ALLOW_ORIGINS.strip():
            return [o.strip() for o in self.CORS_ALLOW_ORIGINS.split(",") if o.strip()]
        return ["http://localhost:5173", "http://127.0.0.1:5173"]

settings = Settings()
