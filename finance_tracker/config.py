"""Application configuration using pydantic-settings."""

from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Database
    database_path: Path = Path("finance_tracker.db")

    # Remote transactions collection
    remote_list_limit: int = 100
    sample_data_fallback: bool = True

    # Dashboard
    recent_transactions_limit: int = 5
    goals_progress_placeholder: int = 65

    # Local identity used by the auth provider
    demo_user_id: str = "user_demo"
    demo_user_email: str = "demo@example.com"
    demo_user_display_name: Optional[str] = None
    auto_sign_in: bool = False

    # Logging
    log_level: str = "INFO"

    # UI
    app_title: str = "FinanceApp"
    port: int = 8081

    @property
    def database_url(self) -> str:
        """Get SQLite connection URL."""
        return f"sqlite:///{self.database_path}"


settings = Settings()
