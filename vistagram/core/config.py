# Defines application-wide settings using pydantic-settings' BaseSettings
# Manages environment variables for:
# API configuration (project name, version)
# MongoDB connection details
# Upload limits and CORS origins
# The base URL the Python client talks to


import os
import json
from typing import Annotated, List, Union

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict
from dotenv import load_dotenv

load_dotenv()

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    # API configuration
    API_PREFIX: str = "/api"
    PROJECT_NAME: str = "Vistagram API"
    VERSION: str = "0.1.0"

    # Server
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "3001"))

    # Database
    MONGODB_URI: str = os.getenv("MONGODB_URI", "mongodb://localhost:27017")
    MONGODB_DB_NAME: str = os.getenv("MONGODB_DB_NAME", "vistagram")
    MONGODB_SERVER_SELECTION_TIMEOUT_MS: int = 5000
    # Minimum wait before a request retries a failed connection
    MONGODB_RECONNECT_INTERVAL_S: float = float(os.getenv("MONGODB_RECONNECT_INTERVAL_S", "5"))

    # CORS
    BACKEND_CORS_ORIGINS: Annotated[List[str], NoDecode] = ["*"]

    # File uploads
    MAX_UPLOAD_SIZE: int = 5 * 1024 * 1024  # 5 MB

    # Base URL used by the Python client to reach the API
    API_BASE_URL: str = os.getenv("API_BASE_URL", "http://localhost:3001")

    # Development settings - set these differently in production
    DEBUG: bool = os.getenv("DEBUG", "False").lower() in ["true", "1", "t"]
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "production")

    @field_validator("BACKEND_CORS_ORIGINS", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v: Union[str, List[str]]) -> List[str]:
        if isinstance(v, str) and not v.startswith("["):
            return [i.strip() for i in v.split(",") if i.strip()]
        elif isinstance(v, str):
            # Handle JSON string format
            try:
                return json.loads(v)
            except ValueError:
                return []
        return v

# Create settings instance
settings = Settings()
