from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator
from typing import Literal

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    APP_NAME: str = "vidtube"
    ENV: Literal["local", "dev", "prod"] = "local"
    API_PREFIX: str = "/api/v1"

    # DB
    MONGODB_URI: str = "mongodb://localhost:27017"
    MONGODB_DB: str = "vidtube"

    # Auth: tokens are minted by the auth service, we only verify them
    JWT_ALG: str = "HS256"
    JWT_SECRET: str = "dev-secret-change-me"
    REQUIRED_AUDIENCE: str | None = None

    # Media store provider
    MEDIA_STORE_PROVIDER: Literal["local", "s3"] = "local"

    # Local media store
    LOCAL_STORAGE_ROOT: str = "./media"
    MEDIA_BASE_URL: str = "http://localhost:8000/media"

    # S3/MinIO
    S3_ENDPOINT_URL: str | None = None  # e.g. http://127.0.0.1:9000 for MinIO
    S3_REGION: str = "us-east-1"
    S3_BUCKET: str = "vidtube-media"
    S3_ACCESS_KEY: str | None = None
    S3_SECRET_KEY: str | None = None
    S3_PUBLIC_BASE_URL: str | None = None

    # Multipart uploads are staged here before being pushed to the media store
    UPLOAD_TEMP_DIR: str = "./public/temp"

    LIST_MAX_LIMIT: int = 100

    @field_validator("MONGODB_URI")
    @classmethod
    def _must_mongodb(cls, v: str):
        if not v.startswith(("mongodb://", "mongodb+srv://")):
            raise ValueError("MONGODB_URI must be a mongodb:// or mongodb+srv:// connection string")
        return v

settings = Settings()
