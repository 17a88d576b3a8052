"""Configuration model for the content core."""

from pathlib import Path
from typing import List
import json
from dataclasses import dataclass, field, asdict, fields

from ..domain.value_objects import Role
from ..exceptions import ConfigurationError

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class AccountConfig:
    """A user account seeded at startup."""
    username: str
    password: str
    email: str = ""
    role: str = "EDITOR"  # "ADMINISTRATOR" or "EDITOR"


def _default_accounts() -> List[AccountConfig]:
    return [
        AccountConfig("admin", "admin123", "admin@example.com", "ADMINISTRATOR"),
        AccountConfig("editor", "editor123", "editor@example.com", "EDITOR"),
    ]


@dataclass
class ReportConfig:
    """Configuration for report generation and export."""
    recent_limit: int = 10
    default_export_format: str = "CSV"  # "CSV" or "TEXT"


@dataclass
class Config:
    """Main configuration model."""
    accounts: List[AccountConfig] = field(default_factory=_default_accounts)
    reports: ReportConfig = field(default_factory=ReportConfig)
    log_level: str = "WARNING"
    load_sample_data: bool = True

    @classmethod
    def default(cls) -> "Config":
        return cls()


def _build(dataclass_type, data, section: str):
    """Build a flat dataclass from a dict, rejecting unknown keys."""
    if not isinstance(data, dict):
        raise ConfigurationError(f"'{section}' must be an object")
    known = {f.name for f in fields(dataclass_type)}
    unknown = set(data) - known
    if unknown:
        raise ConfigurationError(f"Unknown keys in '{section}': {', '.join(sorted(unknown))}")
    try:
        return dataclass_type(**data)
    except TypeError as e:
        raise ConfigurationError(f"Invalid '{section}' section: {e}") from e


def _check_role(account: AccountConfig) -> None:
    role = account.role.strip().upper() if isinstance(account.role, str) else None
    if role not in {r.value for r in Role}:
        raise ConfigurationError(
            f"Unknown role {account.role!r} for account {account.username!r}; "
            f"expected one of {', '.join(r.value for r in Role)}"
        )


def config_from_dict(data: dict) -> Config:
    """Convert a parsed JSON document into a Config."""
    if not isinstance(data, dict):
        raise ConfigurationError("Configuration root must be an object")

    kwargs = {}
    for key, value in data.items():
        if key == "accounts":
            if not isinstance(value, list):
                raise ConfigurationError("'accounts' must be a list")
            kwargs[key] = [_build(AccountConfig, item, "accounts") for item in value]
            for account in kwargs[key]:
                _check_role(account)
        elif key == "reports":
            kwargs[key] = _build(ReportConfig, value, "reports")
        elif key == "log_level":
            if not isinstance(value, str) or value.strip().upper() not in LOG_LEVELS:
                raise ConfigurationError(f"'log_level' must be one of {', '.join(LOG_LEVELS)}")
            kwargs[key] = value
        elif key == "load_sample_data":
            if not isinstance(value, bool):
                raise ConfigurationError("'load_sample_data' must be true or false")
            kwargs[key] = value
        else:
            raise ConfigurationError(f"Unknown configuration key: {key}")

    return Config(**kwargs)


def load_config(config_path: Path) -> Config:
    """Load configuration from JSON file."""
    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            config_data = json.load(f)
    except OSError as e:
        raise ConfigurationError(f"Cannot read {config_path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in {config_path}: {e}") from e

    return config_from_dict(config_data)


def save_config(config: Config, config_path: Path) -> None:
    """Save configuration to JSON file."""
    with open(config_path, 'w', encoding='utf-8') as f:
        json.dump(asdict(config), f, indent=2)


def create_default_config(config_path: Path) -> None:
    """Create a default configuration file."""
    save_config(Config.default(), config_path)
