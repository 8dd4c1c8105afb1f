# contenthub/config.py
from pydantic_settings import BaseSettings
from typing import Optional

class Settings(BaseSettings):
    # Environment
    ENVIRONMENT: str = "development"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"
    APP_NAME: str = "Content Hub API"
    APP_VERSION: str = "1.0.0"

    # Database (relational store endpoint)
    DATABASE_URL: str

    # AWS
    AWS_REGION: str = "us-east-1"
    AWS_ACCESS_KEY_ID: Optional[str] = None
    AWS_SECRET_ACCESS_KEY: Optional[str] = None

    # S3
    S3_BUCKET_NAME: str = "content-management-hub"
    PRESIGNED_URL_EXPIRES: int = 3600

    # Uploads
    DEFAULT_UPLOADER: str = "Content Team"

    # CORS - as string, will be parsed to list
    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:5173"

    @property
    def cors_origins_list(self) -> list:
        return [x.strip() for x in self.CORS_ORIGINS.split(',')]

    @property
    def database_host(self) -> str:
        """Database URL without credentials, safe for logs"""
        return self.DATABASE_URL.split('@')[1] if '@' in self.DATABASE_URL else self.DATABASE_URL

    class Config:
        env_file = ".env"
        case_sensitive = True

settings = Settings()
