from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings

from driving_school import __version__


class Settings(BaseSettings):
    """Application configuration settings"""

    # Application
    app_name: str = "Driving School Scheduler"
    api_version: str = __version__
    environment: str = Field(
        default="development",
        validation_alias=AliasChoices("environment", "node_env"),
    )
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 4000
    shutdown_timeout: float = 30.0

    # CORS
    cors_origins: str = "*"

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins from comma-separated string"""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def is_development(self) -> bool:
        return self.environment.strip().lower() == "development"

    # Pagination
    default_page_limit: int = 10
    max_page_limit: int = 100

    # Service level objectives reported by /health
    slo_target_uptime: float = 0.99
    slo_target_latency_ms: int = 200
    slo_error_budget: float = 0.01
    error_budget_cost: float = 0.01

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"


# Global settings instance
settings = Settings()
