"""Configuration management for Saldo.

Reads configuration from ~/.config/saldo.toml and creates default config if needed.
"""

from pathlib import Path
from dataclasses import dataclass
from typing import Optional
import tomllib
import tomli_w


@dataclass
class Config:
    """Application configuration."""

    base_dir: Path
    db_data_dir: Path
    db_filename: str
    log_level: str
    log_dir: Path
    user_email: Optional[str]
    default_period: str
    export_dir: Path

    @property
    def db_path(self) -> Path:
        """Get the full database path (data_dir/filename)."""
        return self.db_data_dir / self.db_filename

    @classmethod
    def default(cls) -> "Config":
        """Create a Config with default values."""
        home = Path.home()
        base_dir = home / "data" / "saldo"
        return cls(
            base_dir=base_dir,
            db_data_dir=base_dir / "db",
            db_filename="saldo.db",
            log_level="INFO",
            log_dir=base_dir / "logs",
            user_email=None,
            default_period="month",
            export_dir=base_dir / "exports",
        )


def get_config_path() -> Path:
    """Get the path to the config file."""
    return Path.home() / ".config" / "saldo.toml"


def get_migrations_dir() -> Path:
    """Get the path to the migrations directory.

    This is always relative to the code location, not configurable.
    """
    return Path(__file__).parent / "db" / "migrations"


def get_seed_dir() -> Path:
    """Get the path to the directory holding built-in seed data."""
    return Path(__file__).parent / "db" / "seed"


def load_config() -> Config:
    """Load configuration from file, creating default if it doesn't exist.

    Returns:
        Config object with loaded or default values.
    """
    config_path = get_config_path()

    if not config_path.exists():
        config = Config.default()
        _write_config(config)
        return config

    with open(config_path, "rb") as f:
        data = tomllib.load(f)

    return _parse_config(data)


def _parse_config(data: dict) -> Config:
    """Build a Config from parsed TOML, with defaults for any missing values."""
    base_dir = Path(data.get("base_dir", Path.home() / "data" / "saldo"))

    db_config = data.get("database", {})
    db_data_dir = Path(db_config.get("data_dir", base_dir / "db"))
    db_filename = db_config.get("filename", "saldo.db")

    log_config = data.get("logging", {})
    log_level = log_config.get("level", "INFO")
    log_dir = Path(log_config.get("log_dir", base_dir / "logs"))

    # TOML has no null, an empty string means "not set"
    user_config = data.get("user", {})
    user_email = user_config.get("email") or None

    reports_config = data.get("reports", {})
    default_period = reports_config.get("default_period", "month")
    export_dir = Path(reports_config.get("export_dir", base_dir / "exports"))

    return Config(
        base_dir=base_dir,
        db_data_dir=db_data_dir,
        db_filename=db_filename,
        log_level=log_level,
        log_dir=log_dir,
        user_email=user_email,
        default_period=default_period,
        export_dir=export_dir,
    )


def _write_config(config: Config) -> None:
    """Write config to the config file.

    Args:
        config: Config object to write.
    """
    config_path = get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    data = {
        "base_dir": str(config.base_dir),
        "database": {
            "data_dir": str(config.db_data_dir),
            "filename": config.db_filename,
        },
        "logging": {
            "level": config.log_level,
            "log_dir": str(config.log_dir),
        },
        "user": {
            "email": config.user_email or "",
        },
        "reports": {
            "default_period": config.default_period,
            "export_dir": str(config.export_dir),
        },
    }

    with open(config_path, "wb") as f:
        tomli_w.dump(data, f)
