# === portfolio/core/config.py ===
from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL, make_url
from dotenv import load_dotenv

load_dotenv()

class Settings(BaseSettings):
    ENVIRONMENT: str = "development"
    APP_VERSION: str = "1.0.0"
    API_PREFIX: str = "/api"
    CORS_ORIGIN: str = "*"
    ALLOWED_HOSTS: str = "*"
    SLOW_REQUEST_SECONDS: float = 1.0

    #database
    DATABASE_URL: str = ""
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_NAME: str = "portfolio"
    DB_USERNAME: str = "postgres"
    DB_PASSWORD: str = ""
    DB_SSL: bool = False
    DB_SYNCHRONIZE: Optional[bool] = None
    DB_ECHO: bool = False
    DB_CONNECT_TIMEOUT: float = 10.0
    DB_QUERY_TIMEOUT: float = 5.0

    #contact form email
    RESEND_API_KEY: str = ""
    RESEND_API_URL: str = "https://api.resend.com"
    CONTACT_FORM_TO: str = "contact@example.com"
    CONTACT_FORM_FROM: str = "noreply@example.com"
    EMAIL_TIMEOUT: float = 10.0

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"

    @property
    def synchronize_schema(self) -> bool:
        # create_all on startup is a development convenience only
        if self.DB_SYNCHRONIZE is not None:
            return self.DB_SYNCHRONIZE
        return self.ENVIRONMENT.lower() == "development"

    @property
    def cors_origins(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ORIGIN.split(",") if origin.strip()]

    @property
    def allowed_hosts(self) -> List[str]:
        return [host.strip() for host in self.ALLOWED_HOSTS.split(",") if host.strip()] or ["*"]

    @property
    def database_url(self) -> URL:
        if self.DATABASE_URL:
            return make_url(self.DATABASE_URL)
        return URL.create(
            "postgresql+asyncpg",
            username=self.DB_USERNAME,
            password=self.DB_PASSWORD or None,
            host=self.DB_HOST,
            port=self.DB_PORT,
            database=self.DB_NAME,
        )

settings = Settings()
