"""Configuration models for the API."""

from typing import List
from pydantic import BaseModel, Field
import os


class APIConfig(BaseModel):
    """API configuration settings."""

    # Server settings
    host: str = Field(default="0.0.0.0", description="Host to bind to")
    port: int = Field(default=8080, description="Port to bind to")
    log_level: str = Field(default="info", description="Log level for the service and uvicorn")

    # Security
    cors_origins: List[str] = Field(default=["*"], description="CORS allowed origins")

    @classmethod
    def from_env(cls) -> "APIConfig":
        """Create config from environment variables."""
        return cls(
            host=os.getenv("API_HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "8080")),
            log_level=os.getenv("LOG_LEVEL", "info").lower(),
            cors_origins=os.getenv("CORS_ORIGINS", "*").split(","),
        )
