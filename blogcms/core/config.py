from typing import List

from fastapi import Request
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    PROJECT_NAME: str = "Personal Blog CMS"
    HOST: str = "0.0.0.0"
    PORT: int = 3001
    NODE_ENV: str = "development"
    LOG_LEVEL: str = "INFO"

    DATABASE_URL: str = "sqlite:///./blog.db"

    # Auth
    JWT_SECRET: str = "your-super-secret-jwt-key-change-in-production"
    SESSION_SECRET: str = "your-super-secret-session-key-change-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24  # 24 hours

    # Seeded admin account
    DEFAULT_ADMIN_USERNAME: str = "admin"
    DEFAULT_ADMIN_EMAIL: str = "admin@example.com"
    DEFAULT_ADMIN_PASSWORD: str = "admin123"

    # Local storage
    UPLOAD_DIR: str = "./uploads"
    MAX_UPLOAD_SIZE: int = 5 * 1024 * 1024  # 5MB
    ADMIN_DIR: str = "./admin"
    DATA_DIR: str = "./data"
    I18N_PATH: str = "./data/i18n.json"

    # Rate limiting, in `limits` notation ("<count>/<amount> <unit>")
    RATE_LIMIT: str = "100/minute"
    AUTH_RATE_LIMIT: str = "5/15 minutes"

    # Comma separated, overrides the NODE_ENV based default
    ALLOWED_ORIGINS: str = ""

    @property
    def is_production(self) -> bool:
        return self.NODE_ENV == "production"

    @property
    def cors_origins(self) -> List[str]:
        if self.ALLOWED_ORIGINS:
            return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",") if origin.strip()]
        if self.is_production:
            return ["https://yourdomain.com"]
        return ["http://localhost:3000"]

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()


def get_settings(request: Request) -> Settings:
    return request.app.state.settings
