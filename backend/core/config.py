import os
import re
from datetime import timedelta
from functools import lru_cache

from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigurationError(RuntimeError):
    """Raised when a required configuration key is missing."""


class AppSection(BaseModel):
    name: str = "conduit-api"
    version: str = "0.1.0"
    port: int = 3001
    host: str = "0.0.0.0"
    env: str = "development"
    log_level: str | None = None
    log_json: bool = False


class PoolSection(BaseModel):
    min: int = 2
    max: int = 10


class DatabaseSection(BaseModel):
    host: str = "localhost"
    port: int = 5432
    name: str = "conduit"
    ssl: bool = False
    pool: PoolSection = PoolSection()


class JwtSection(BaseModel):
    secret: str = ""
    expires_in: str = "7d"
    algorithm: str = "HS256"


class BcryptSection(BaseModel):
    rounds: int = 12


class SessionSection(BaseModel):
    secret: str = ""
    max_age: int = 30 * 24 * 60 * 60


class AuthSection(BaseModel):
    jwt: JwtSection = JwtSection()
    bcrypt: BcryptSection = BcryptSection()
    session: SessionSection = SessionSection()


class CorsSection(BaseModel):
    origins: list[str] = ["http://localhost:3000"]
    credentials: bool = True


class RateLimitSection(BaseModel):
    window_ms: int = 15 * 60 * 1000
    max: int = 100


class SecuritySection(BaseModel):
    cors: CorsSection = CorsSection()
    rate_limit: RateLimitSection = RateLimitSection()


class Settings(BaseSettings):
    app: AppSection = AppSection()
    database: DatabaseSection = DatabaseSection()
    auth: AuthSection = AuthSection()
    security: SecuritySection = SecuritySection()

    model_config = SettingsConfigDict(
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore",
    )

    @property
    def is_production(self) -> bool:
        return self.app.env in ("production", "prod")

    def lookup(self, dotted_key: str):
        """Resolve ``"auth.jwt.secret"`` style keys; None when unset or empty."""
        node = self
        for part in dotted_key.split("."):
            node = getattr(node, part, None)
            if node is None:
                return None
        return None if node == "" else node


REQUIRED_KEYS = (
    "app.name",
    "app.port",
    "database.host",
    "database.port",
    "auth.jwt.secret",
)


def validate_config(config: Settings) -> None:
    """Raise ConfigurationError for the first missing required key."""
    for key in REQUIRED_KEYS:
        if config.lookup(key) is None:
            raise ConfigurationError(f"Missing required configuration: {key}")


def _env() -> str:
    return os.getenv("APP_ENV", os.getenv("APP__ENV", "development")).lower()


def is_development() -> bool:
    return _env() in ("development", "dev")


def is_production() -> bool:
    return _env() in ("production", "prod")


def is_test() -> bool:
    return _env() == "test"


_DURATION = re.compile(r"^\s*(\d+)\s*([smhd])\s*$")
_UNITS = {"s": "seconds", "m": "minutes", "h": "hours", "d": "days"}


def parse_duration(value: str) -> timedelta:
    """Parse ``"7d"``, ``"12h"``, ``"30m"`` or ``"45s"`` into a timedelta."""
    if not (match := _DURATION.match(value)):
        raise ValueError(f"Invalid duration: {value!r}")
    amount, unit = match.groups()
    return timedelta(**{_UNITS[unit]: int(amount)})


@lru_cache
def get_settings() -> Settings:
    config = Settings()
    if not is_test():
        validate_config(config)
    return config
