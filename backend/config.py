import json
import os
from pathlib import Path
from typing import Any, Dict

from pydantic_settings import BaseSettings, SettingsConfigDict


def load_config() -> Dict[str, Any]:
    """Load configuration from config.json file"""
    config_path = Path(__file__).parent / "config.json"
    if os.getenv("TEST") or os.getenv("TESTING"):
        config_path = Path(__file__).parent / "config.test.json"
    if not config_path.exists():
        # Create new from template if missing
        template_path = Path(__file__).parent / "config.template.json"
        if not template_path.exists():
            raise FileNotFoundError(
                f"Template config not found: {template_path}"
            )
        with open(template_path, "r") as f:
            template_config = json.load(f)
        with open(config_path, "w") as f:
            json.dump(template_config, f, indent=2)
    with open(config_path, "r") as f:
        return json.load(f)


# Load config once at module level
_config = load_config()


class Settings(BaseSettings):
    """Application settings loaded from config.json and the environment"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = _config.get("app_name", "Campus Maintenance Ticketing")

    # Database
    database_url: str = os.getenv(
        "DATABASE_URL", _config.get("database_url", "sqlite:///./mts.db")
    )

    # Auth (secret from .env)
    secret_key: str = os.getenv(
        "SECRET_KEY", "change-this-secret-key-in-production"
    )
    algorithm: str = _config.get("auth", {}).get("algorithm", "HS256")
    access_token_expire_minutes: int = int(
        os.getenv(
            "ACCESS_TOKEN_EXPIRE_MINUTES",
            _config.get("auth", {}).get("access_token_expire_minutes", 60),
        )
    )
    default_admin_name: str = (
        _config.get("auth", {}).get("default_admin", {}).get("name", "admin")
    )
    default_admin_password: str = os.getenv(
        "DEFAULT_ADMIN_PASSWORD",
        _config.get("auth", {})
        .get("default_admin", {})
        .get("password", "adminpassword"),
    )
    default_admin_department: str = (
        _config.get("auth", {})
        .get("default_admin", {})
        .get("department", "ITS")
    )

    # Seed default statuses and admin account on startup
    seed_on_startup: bool = _config.get("seed_on_startup", True)

    # Tickets
    default_statuses: list = _config.get("tickets", {}).get(
        "default_statuses", ["Open", "In Progress", "Closed", "For Approval"]
    )
    enforce_status_transitions: bool = _config.get("tickets", {}).get(
        "enforce_status_transitions", False
    )

    # Notification feed polling
    notification_poll_interval_seconds: int = _config.get(
        "notifications", {}
    ).get("poll_interval_seconds", 30)

    cors_origins: list = _config.get("cors_origins", ["*"])


# Global settings instance
settings = Settings()
