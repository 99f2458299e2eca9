import os
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

class Settings(BaseSettings):
    """Application settings."""

    # API Settings
    API_TITLE: str = "Customer API"
    API_DESCRIPTION: str = "CRUD and search API for customer records"
    API_VERSION: str = "1.0.0"
    API_PREFIX: str = "/api/v1"
    BASE_URL: str = os.getenv("BASE_URL", "http://localhost:8000")
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "local")

    # Server Settings
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "8000"))
    SSL_KEYFILE: str = os.getenv("SSL_KEYFILE", "")
    SSL_CERTFILE: str = os.getenv("SSL_CERTFILE", "")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Database Settings
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./customers.db")
    DB_ECHO: bool = os.getenv("DB_ECHO", "False").lower() == "true"

    # JWT Settings
    JWT_SECRET_KEY: str = os.getenv("JWT_SECRET_KEY", "")
    JWT_ALGORITHM: str = os.getenv("JWT_ALGORITHM", "HS512")
    JWT_AUDIENCE: str = os.getenv("JWT_AUDIENCE", "")
    JWT_ISSUER: str = os.getenv("JWT_ISSUER", "")
    JWT_ACCESS_TOKEN_EXPIRE_MINUTES: int = int(os.getenv("JWT_ACCESS_TOKEN_EXPIRE_MINUTES", "15"))
    # Accept plain "admin-token" / "user-token" strings; ignored in prod
    JWT_MOCK_ENABLED: bool = os.getenv("JWT_MOCK_ENABLED", "False").lower() == "true"

    # Business rules
    CUSTOMER_MIN_AGE: int = int(os.getenv("CUSTOMER_MIN_AGE", "18"))

    # Documentation / headers
    OPENAPI_OUTPUT_FILE: str = os.getenv("OPENAPI_OUTPUT_FILE", "")
    SECURITY_HEADERS_ENABLED: bool = os.getenv("SECURITY_HEADERS_ENABLED", "True").lower() == "true"

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "prod"

    @property
    def mock_tokens_enabled(self) -> bool:
        return self.JWT_MOCK_ENABLED and not self.is_production


settings = Settings()
