import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field

load_dotenv()


class Settings(BaseModel):
    service_name: str = "bitcoin-price-mcp"
    environment: str = Field(default_factory=lambda: os.getenv("ENVIRONMENT", "dev"))
    log_level: str = Field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))

    # HTTP server
    host: str = Field(default_factory=lambda: os.getenv("HOST", "0.0.0.0"))
    port: int = Field(default_factory=lambda: int(os.getenv("PORT", "3000")))

    # SSE keep-alive period in seconds
    heartbeat_seconds: float = Field(default_factory=lambda: float(os.getenv("HEARTBEAT_SECONDS", "30")))

    # Outbound price provider calls
    provider_timeout_seconds: float = 10.0

    @property
    def events_url(self) -> str:
        """Public URL of the SSE endpoint, for the startup banner."""
        return f"http://localhost:{self.port}/events"

settings = Settings()
