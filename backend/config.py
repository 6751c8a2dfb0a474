"""Application configuration"""
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # API settings
    api_port: int = 8000
    api_host: str = "127.0.0.1"

    # Diagram settings
    default_theme: str = "Classic"  # Used when a request omits the theme
    max_request_concepts: int = 50  # Extra concepts in a request are dropped

    # Keyword fallback settings
    keyword_max: int = 8
    keyword_filler_description: str = "Key idea from the text"

    # Logging
    log_level: str = "INFO"

    class Config:
        env_file = ".env"

settings = Settings()
