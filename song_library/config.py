from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings."""

    # Application
    app_name: str = "song-library"
    debug: bool = False
    log_level: str = "INFO"

    # Server ("::" listens on IPv6 and, on dual-stack hosts, IPv4 too)
    host: str = "::"
    port: int = 8080

    # Persistence
    data_file: str = "music_library.json"

    class Config:
        env_file = ".env"
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    return Settings()
