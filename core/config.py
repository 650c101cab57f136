"""Service configuration.

Settings live in a frozen dataclass so they can't drift once the app is
built. Defaults suit local development; every field can be overridden from
the environment (``TASKS_PORT=8080``) or by passing an explicit instance to
``api.main.create_app`` (which is what the tests do).
"""

import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path

# Seed file ships next to the project root.
DEFAULT_SEED_FILE = Path(__file__).resolve().parent.parent / "task.json"


def _split_origins(raw: str) -> tuple[str, ...]:
    return tuple(o.strip() for o in raw.split(",") if o.strip())


@dataclass(frozen=True)
class Settings:
    """Runtime settings for the task service.

    Usage::

        settings = Settings.from_env()
        uvicorn.run(create_app(settings), host=settings.host, port=settings.port)
    """

    host: str = "127.0.0.1"
    port: int = 3000
    seed_file: Path = DEFAULT_SEED_FILE
    log_level: str = "INFO"
    debug: bool = False
    cors_origins: tuple[str, ...] = field(
        default=("http://localhost:3000", "http://localhost:3001")
    )

    @classmethod
    def default(cls) -> "Settings":
        """Create settings with all defaults."""
        return cls()

    @classmethod
    def from_env(cls, prefix: str = "TASKS_") -> "Settings":
        """Create settings from environment variables.

        Example: TASKS_SEED_FILE=/srv/seed.json TASKS_PORT=8080
        """
        overrides = {}

        host = os.getenv(f"{prefix}HOST")
        if host:
            overrides["host"] = host

        port = os.getenv(f"{prefix}PORT")
        if port:
            overrides["port"] = int(port)

        seed_file = os.getenv(f"{prefix}SEED_FILE")
        if seed_file:
            overrides["seed_file"] = Path(seed_file)

        log_level = os.getenv(f"{prefix}LOG_LEVEL")
        if log_level:
            overrides["log_level"] = log_level.upper()

        debug = os.getenv(f"{prefix}DEBUG")
        if debug:
            overrides["debug"] = debug.lower() == "true"

        origins = os.getenv(f"{prefix}CORS_ORIGINS")
        if origins:
            overrides["cors_origins"] = _split_origins(origins)

        return cls(**overrides)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Process-wide settings, read from the environment once."""
    return Settings.from_env()
