"""
API configuration settings.
"""

from pydantic_settings import BaseSettings
from typing import List, Optional


class Settings(BaseSettings):
    """API settings."""

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    # CORS
    CORS_ORIGINS: List[str] = ["*"]

    # Simulation
    DEFAULT_SIMULATION_COUNT: int = 1000
    MAX_SIMULATION_COUNT: int = 100_000

    # Preview
    MIN_CHANCE_TO_SHOW: float = 0.001
    CHANCE_PRECISION: int = 2

    # Persistence (unset keeps saved effects in memory)
    EFFECT_STORE_DIR: Optional[str] = None

    class Config:
        env_file = ".env"


settings = Settings()
