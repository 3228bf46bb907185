"""Configuration management for the YouTube Content API.

Settings are layered, later layers overriding earlier ones:

    1. ``{CONFIG_DIR}/settings.yaml`` (required base file)
    2. ``{CONFIG_DIR}/settings.{environment}.yaml`` (optional overlay)
    3. Environment variables (secrets and deployment-specific values)

The merged mapping is validated by pydantic models so configuration errors
surface once, at startup, instead of on the first request that needs them.

Environment Variables:
    APP_ENVIRONMENT: Selects the overlay file (falls back to
        ASPNETCORE_ENVIRONMENT, default "Production")
    CONFIG_DIR: Directory containing settings files (default: "config")
    PORT: Listener port (default: 5000)
    DATABASE_URL: Overrides database.url
    JWT_KEY / JWT_ISSUER / JWT_AUDIENCE: Override jwt.*
    FERNET_KEY: Overrides encryption.fernet_key
    CORS_ALLOWED_ORIGINS: Comma-separated origin allow-list
    GOOGLE_CLIENT_ID / GOOGLE_CLIENT_SECRET / GOOGLE_REDIRECT_URI
    LOG_LEVEL: Overrides logging.level

Usage:
    from content_api.config import get_settings

    settings = get_settings()
    settings.jwt.issuer
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Any

import structlog
import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from content_api.exceptions import ConfigurationError

log = structlog.get_logger(__name__)

DEFAULT_ENVIRONMENT = "Production"
DEFAULT_PORT = 5000
DEFAULT_CONFIG_DIR = "config"

DEFAULT_CORS_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:5173",
    "http://localhost:5176",
    "http://localhost:5178",
    "http://localhost:5179",
    "http://localhost:5180",
    "https://your-frontend.onrender.com",
]

# Minimum HS256 key length (256 bits)
MIN_JWT_KEY_LENGTH = 32


class DatabaseSettings(BaseModel):
    """Relational database connection settings."""

    url: str = Field(..., min_length=1)
    echo: bool = False
    auto_create_schema: bool = False

    @field_validator("url")
    @classmethod
    def use_async_driver(cls, value: str) -> str:
        # Hosting providers hand out postgresql:// but we need the asyncpg driver
        if value.startswith("postgresql://"):
            return value.replace("postgresql://", "postgresql+asyncpg://", 1)
        return value


class JwtSettings(BaseModel):
    """Bearer token signing and validation settings."""

    key: str = Field(..., min_length=MIN_JWT_KEY_LENGTH)
    issuer: str = Field(..., min_length=1)
    audience: str = Field(..., min_length=1)
    expiry_minutes: int = Field(default=60, ge=1, le=60 * 24 * 30)
    algorithm: str = "HS256"


class CorsSettings(BaseModel):
    allowed_origins: list[str] = Field(default_factory=lambda: list(DEFAULT_CORS_ORIGINS))


class EncryptionSettings(BaseModel):
    fernet_key: str | None = None


class GoogleOAuthSettings(BaseModel):
    """Google OAuth client used to link YouTube channels."""

    client_id: str | None = None
    client_secret: str | None = None
    redirect_uri: str | None = None
    scopes: list[str] = Field(
        default_factory=lambda: [
            "https://www.googleapis.com/auth/youtube.readonly",
            "https://www.googleapis.com/auth/yt-analytics.readonly",
        ]
    )

    @property
    def is_configured(self) -> bool:
        return bool(self.client_id and self.client_secret and self.redirect_uri)


class SeedSettings(BaseModel):
    admin_email: str | None = None
    admin_password: str | None = None
    admin_name: str = "Administrator"


class LoggingSettings(BaseModel):
    level: str = "INFO"
    json_output: bool = Field(default=True, alias="json")

    model_config = {"populate_by_name": True}


class StaticSettings(BaseModel):
    directory: str = "build"


class Settings(BaseModel):
    """Validated application settings.

    Attributes:
        environment: Name of the active environment (e.g. "Development").
        database: Connection settings (``ConnectionStrings:DefaultConnection``).
        jwt: Bearer token settings.
        cors: Cross-origin allow-list.
        encryption: Fernet key for OAuth token storage.
        google_oauth: Google OAuth client settings.
        seed: Bootstrap data settings.
        logging: Log level and output format.
        static: Frontend bundle directory.
    """

    environment: str = DEFAULT_ENVIRONMENT
    database: DatabaseSettings
    jwt: JwtSettings
    cors: CorsSettings = Field(default_factory=CorsSettings)
    encryption: EncryptionSettings = Field(default_factory=EncryptionSettings)
    google_oauth: GoogleOAuthSettings = Field(default_factory=GoogleOAuthSettings)
    seed: SeedSettings = Field(default_factory=SeedSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    static: StaticSettings = Field(default_factory=StaticSettings)

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"


def get_environment() -> str:
    """Get the active environment name.

    Environment Variables:
        APP_ENVIRONMENT: Preferred variable.
        ASPNETCORE_ENVIRONMENT: Accepted for existing deployments.

    Returns:
        Environment name, "Production" when neither variable is set.
    """
    return (
        os.getenv("APP_ENVIRONMENT")
        or os.getenv("ASPNETCORE_ENVIRONMENT")
        or DEFAULT_ENVIRONMENT
    )


def get_port() -> int:
    """Get listener port from environment.

    Environment Variable:
        PORT: TCP port (default: 5000)

    Returns:
        Port number.

    Raises:
        ConfigurationError: If PORT is set but not a valid port number.
    """
    raw = os.getenv("PORT")
    if not raw:
        return DEFAULT_PORT
    try:
        port = int(raw)
    except ValueError as e:
        raise ConfigurationError(f"PORT must be an integer, got {raw!r}") from e
    if not 0 < port < 65536:
        raise ConfigurationError(f"PORT out of range: {port}")
    return port


def get_config_dir() -> Path:
    """Get settings directory from environment (default: "config")."""
    return Path(os.getenv("CONFIG_DIR", DEFAULT_CONFIG_DIR))


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge ``override`` into a copy of ``base``.

    Nested mappings are merged key by key; any other value in ``override``
    replaces the one in ``base``.
    """
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Settings file must contain a mapping: {path}")
    return data


def _split_csv(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


# (environment variable, settings path, parser)
_ENV_OVERRIDES: list[tuple[str, tuple[str, ...], Any]] = [
    ("DATABASE_URL", ("database", "url"), str),
    ("JWT_KEY", ("jwt", "key"), str),
    ("JWT_ISSUER", ("jwt", "issuer"), str),
    ("JWT_AUDIENCE", ("jwt", "audience"), str),
    ("FERNET_KEY", ("encryption", "fernet_key"), str),
    ("CORS_ALLOWED_ORIGINS", ("cors", "allowed_origins"), _split_csv),
    ("GOOGLE_CLIENT_ID", ("google_oauth", "client_id"), str),
    ("GOOGLE_CLIENT_SECRET", ("google_oauth", "client_secret"), str),
    ("GOOGLE_REDIRECT_URI", ("google_oauth", "redirect_uri"), str),
    ("SEED_ADMIN_EMAIL", ("seed", "admin_email"), str),
    ("SEED_ADMIN_PASSWORD", ("seed", "admin_password"), str),
    ("LOG_LEVEL", ("logging", "level"), str),
]


def _environment_overrides(environ: dict[str, str]) -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    for env_name, path, parse in _ENV_OVERRIDES:
        raw = environ.get(env_name)
        if not raw:
            continue
        node = overrides
        for part in path[:-1]:
            node = node.setdefault(part, {})
        node[path[-1]] = parse(raw)
    return overrides


def load_settings(
    config_dir: Path | None = None,
    environment: str | None = None,
    environ: dict[str, str] | None = None,
) -> Settings:
    """Load and validate layered settings.

    Args:
        config_dir: Directory with ``settings.yaml`` (default: ``get_config_dir()``).
        environment: Overlay name (default: ``get_environment()``).
        environ: Environment mapping for overrides (default: ``os.environ``).

    Returns:
        Validated Settings.

    Raises:
        ConfigurationError: If the base file is missing or values are invalid.
    """
    config_dir = config_dir if config_dir is not None else get_config_dir()
    environment = environment or get_environment()
    environ = dict(os.environ) if environ is None else environ

    base_file = config_dir / "settings.yaml"
    if not base_file.exists():
        raise ConfigurationError(f"Settings file not found: {base_file}")

    merged = _read_yaml(base_file)

    overlay_file = config_dir / f"settings.{environment}.yaml"
    if overlay_file.exists():
        merged = deep_merge(merged, _read_yaml(overlay_file))

    merged = deep_merge(merged, _environment_overrides(environ))
    merged["environment"] = environment

    try:
        settings = Settings.model_validate(merged)
    except ValidationError as e:
        fields = sorted({".".join(str(p) for p in err["loc"]) for err in e.errors()})
        raise ConfigurationError(
            f"Invalid configuration: {', '.join(fields)}",
            details={"fields": fields},
        ) from e

    log.debug(
        "settings_loaded",
        environment=environment,
        config_dir=str(config_dir),
        overlay_applied=overlay_file.exists(),
    )
    return settings


@lru_cache
def get_settings() -> Settings:
    """Get process-wide settings (loaded once and cached)."""
    return load_settings()
