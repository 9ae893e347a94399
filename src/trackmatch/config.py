"""Application configuration."""

from pathlib import Path
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    app_name: str = "trackmatch"
    debug: bool = False

    # Logging
    log_level: str = "INFO"
    log_file: Path | None = None

    # Paths
    package_dir: Path = Path(__file__).parent
    carriers_dir: Path = package_dir / "carriers"
    countries_file: Path = package_dir / "data" / "countries.yaml"

    # Matching
    fanout_workers: int = 0
    max_tracking_number_length: int = 64

    class Config:
        env_prefix = "TRACKMATCH_"
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
