"""
Configuration settings for the Traffic Correlation Auditor.
"""
import os
from typing import List
from dotenv import load_dotenv

# Load .env file from current directory or parent directories
load_dotenv()


class Settings:
    """Application settings."""

    # Application settings
    PROJECT_NAME: str = "Traffic Correlation Auditor"
    PROJECT_VERSION: str = "1.0.0"
    PROJECT_DESCRIPTION: str = "Correlate gateway and endpoint traffic logs to find blind spots and risky allowed flows"

    # API settings
    API_V1_STR: str = "/api/v1"

    # Security settings
    ALLOWED_ORIGINS: List[str] = [
        "http://localhost",
        "http://localhost:8080",
        "http://127.0.0.1",
        "http://127.0.0.1:8080"
    ]

    def __init__(self):
        """Read environment-driven settings at construction time."""
        self.DEBUG: bool = os.getenv("DEBUG", "False").lower() == "true"
        self.LOG_LEVEL: str = os.getenv("LOG_LEVEL", "DEBUG" if self.DEBUG else "INFO")

        # Report generation settings
        self.OPENAI_API_KEY: str = os.getenv("OPENAI_API_KEY", "")
        self.OPENAI_MODEL: str = os.getenv("OPENAI_MODEL", "gpt-4o-mini")
        self.REPORT_MAX_RETRIES: int = int(os.getenv("REPORT_MAX_RETRIES", "3"))
        self.REPORT_RETRY_DELAY: int = int(os.getenv("REPORT_RETRY_DELAY", "5"))


settings = Settings()
