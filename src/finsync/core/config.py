#!/usr/bin/env python3
"""
Configuration Management for Frollo → PocketSmith Sync

Handles environment-based configuration with secure defaults and validation.
Values are read from the process environment, optionally seeded from a .env
file. Command-line flags may override the credentials at run time.
"""

import logging
import os
import tempfile
from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

FROLLO_CLIENT_ID = "UCyPI63qO8fVsjnxNcEuVbHDOWSr8tQiDTrFsrb93o0"


class Environment(Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TEST = "test"
    PRODUCTION = "production"


@dataclass
class FrolloConfig:
    """Frollo (source ledger) configuration."""

    username: str | None = None
    password: str | None = None
    client_id: str = FROLLO_CLIENT_ID
    auth_url: str = "https://id.frollo.us/oauth/token"
    base_url: str = "https://api.frollo.us/api/v2"
    # Must fit a whole 12-month window; paging cursors are not followed
    page_size: int = 150
    timeout: int = 30


@dataclass
class PocketsmithConfig:
    """PocketSmith (destination ledger) configuration."""

    api_token: str | None = None
    base_url: str = "https://api.pocketsmith.com/v2"
    timeout: int = 30


@dataclass
class SyncConfig:
    """Sync engine tuning."""

    account_ids: list[str] = field(default_factory=list)
    match_threshold: int = 10
    window_months: int = 12
    step_months: int = 6
    continue_on_error: bool = False


@dataclass
class Config:
    """
    Main configuration class for the sync application.

    Loads configuration from environment variables with defaults
    and validation for each environment type.
    """

    environment: Environment
    data_dir: Path

    frollo: FrolloConfig
    pocketsmith: PocketsmithConfig
    sync: SyncConfig

    debug: bool = False
    log_level: str = "INFO"

    @property
    def reports_dir(self) -> Path:
        """Directory receiving JSON sync run reports."""
        return self.data_dir / "sync" / "reports"

    @classmethod
    def from_environment(cls) -> "Config":
        """Create configuration from environment variables."""
        env = Environment(os.getenv("FINSYNC_ENV", "development"))

        if env == Environment.TEST:
            default_test_dir = Path(tempfile.gettempdir()) / "test_finsync"
            data_dir = Path(os.getenv("FINSYNC_DATA_DIR", str(default_test_dir)))
        else:
            data_dir = Path(os.getenv("FINSYNC_DATA_DIR", "./data")).expanduser().resolve()

        timeout = _parse_int(os.getenv("HTTP_TIMEOUT", "30"), default=30)

        frollo = FrolloConfig(
            username=os.getenv("FROLLO_USERNAME") or None,
            password=os.getenv("FROLLO_PASSWORD") or None,
            page_size=_parse_int(os.getenv("FROLLO_PAGE_SIZE", "150"), default=150),
            timeout=timeout,
        )

        pocketsmith = PocketsmithConfig(
            api_token=os.getenv("POCKETSMITH_TOKEN") or None,
            timeout=timeout,
        )

        sync = SyncConfig(
            account_ids=_parse_list(os.getenv("ACCOUNTS_TO_SYNC", "")),
            match_threshold=_parse_int(os.getenv("SYNC_MATCH_THRESHOLD", "10"), default=10),
            window_months=_parse_int(os.getenv("SYNC_WINDOW_MONTHS", "12"), default=12),
            step_months=_parse_int(os.getenv("SYNC_STEP_MONTHS", "6"), default=6),
            continue_on_error=os.getenv("SYNC_CONTINUE_ON_ERROR", "false").lower() == "true",
        )

        return cls(
            environment=env,
            data_dir=data_dir,
            frollo=frollo,
            pocketsmith=pocketsmith,
            sync=sync,
            debug=os.getenv("DEBUG", "false").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    def validate(self) -> list:
        """Validate configuration and return list of errors."""
        errors = []

        if self.frollo.page_size <= 0:
            errors.append("FROLLO_PAGE_SIZE must be positive")
        if self.frollo.timeout <= 0 or self.pocketsmith.timeout <= 0:
            errors.append("HTTP_TIMEOUT must be positive")
        if self.sync.match_threshold < 0:
            errors.append("SYNC_MATCH_THRESHOLD must be non-negative")
        if self.sync.window_months <= 0:
            errors.append("SYNC_WINDOW_MONTHS must be positive")
        if self.sync.step_months <= 0:
            errors.append("SYNC_STEP_MONTHS must be positive")
        elif self.sync.step_months > self.sync.window_months:
            errors.append("SYNC_STEP_MONTHS must not exceed SYNC_WINDOW_MONTHS (windows would leave gaps)")

        return errors

    def missing_required(self) -> list[str]:
        """
        List required sync settings that are absent.

        Only the sync commands need these; viewing config or version does not.
        """
        missing = []
        if not self.frollo.username:
            missing.append("Frollo username (--username or FROLLO_USERNAME)")
        if not self.frollo.password:
            missing.append("Frollo password (--password or FROLLO_PASSWORD)")
        if not self.pocketsmith.api_token:
            missing.append("PocketSmith token (--token or POCKETSMITH_TOKEN)")
        if not self.sync.account_ids:
            missing.append("accounts to sync (--accounts or ACCOUNTS_TO_SYNC)")
        return missing

    def with_overrides(
        self,
        username: str | None = None,
        password: str | None = None,
        token: str | None = None,
        accounts: str | None = None,
        continue_on_error: bool | None = None,
    ) -> "Config":
        """
        Return a copy with command-line values taking precedence.

        Args:
            username: Frollo username
            password: Frollo password
            token: PocketSmith developer key
            accounts: Comma-separated Frollo account IDs
            continue_on_error: Keep going after an account fails to resolve

        Returns:
            New Config; the global instance is left untouched
        """
        frollo = replace(
            self.frollo,
            username=username or self.frollo.username,
            password=password or self.frollo.password,
        )
        pocketsmith = replace(self.pocketsmith, api_token=token or self.pocketsmith.api_token)
        sync = replace(
            self.sync,
            account_ids=_parse_list(accounts) if accounts else list(self.sync.account_ids),
            continue_on_error=self.sync.continue_on_error if continue_on_error is None else continue_on_error,
        )
        return replace(self, frollo=frollo, pocketsmith=pocketsmith, sync=sync)

    def setup_logging(self) -> None:
        """Configure logging based on configuration."""
        level = getattr(logging, self.log_level, logging.INFO)

        if self.environment == Environment.DEVELOPMENT:
            format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        else:
            format_str = "%(asctime)s - %(levelname)s - %(message)s"

        logging.basicConfig(level=level, format=format_str, datefmt="%Y-%m-%d %H:%M:%S")

        # Reduce noise from HTTP libraries outside development
        if self.environment != Environment.DEVELOPMENT:
            logging.getLogger("urllib3").setLevel(logging.WARNING)
            logging.getLogger("requests").setLevel(logging.WARNING)

    def get_sensitive_fields(self) -> list:
        """Get list of field names that contain sensitive data."""
        return [
            "frollo.username",
            "frollo.password",
            "pocketsmith.api_token",
        ]

    def to_dict(self, include_sensitive: bool = False) -> dict[str, Any]:
        """Convert configuration to dictionary, optionally excluding sensitive data."""
        result: dict[str, Any] = {}

        for field_name, field_value in self.__dict__.items():
            if isinstance(field_value, Path):
                result[field_name] = str(field_value)
            elif isinstance(field_value, Enum):
                result[field_name] = field_value.value
            elif hasattr(field_value, "__dict__"):
                # Nested dataclass
                nested_dict: dict[str, Any] = {}
                for nested_name, nested_value in field_value.__dict__.items():
                    full_field_name = f"{field_name}.{nested_name}"

                    if not include_sensitive and full_field_name in self.get_sensitive_fields():
                        nested_dict[nested_name] = "***REDACTED***" if nested_value else None
                    elif isinstance(nested_value, Path):
                        nested_dict[nested_name] = str(nested_value)
                    else:
                        nested_dict[nested_name] = nested_value

                result[field_name] = nested_dict
            else:
                result[field_name] = field_value

        return result


def _parse_list(value: str, delimiter: str = ",") -> list:
    """Parse comma-separated string into list, handling empty values."""
    if not value:
        return []
    return [item.strip() for item in value.split(delimiter) if item.strip()]


def _parse_int(value: str, default: int) -> int:
    """Parse an integer setting; validate() reports the non-positive ones."""
    try:
        return int(value)
    except (TypeError, ValueError):
        logging.getLogger(__name__).warning(f"Ignoring non-integer setting {value!r}, using {default}")
        return default


# Global configuration instance
_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config.from_environment()

        errors = _config.validate()
        if errors:
            raise ValueError(f"Configuration validation failed: {'; '.join(errors)}")

        _config.setup_logging()

    return _config


def reload_config() -> Config:
    """Reload configuration from environment (useful for testing)."""
    global _config
    _config = None
    return get_config()
