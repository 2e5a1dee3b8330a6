import logging
import os
from dataclasses import dataclass
from pathlib import Path

from textual.logging import TextualHandler

from howsit_tui.errors import ConfigError


VERSION = "0.1.0"

DEFAULT_SERVER = "localhost"
DEFAULT_PORT = 11211
DEFAULT_REFRESH_SECONDS = 5
DEFAULT_MAX_SLABS_PER_PAGE = 20
DEFAULT_SLAB_CAPACITY = 100
DEFAULT_TIMEOUT_SECONDS = 5.0

PAGE_SIZE = 1024 * 1024
WARN_THRESHOLD = 1000

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass
class Settings:
    server: str = DEFAULT_SERVER
    port: int = DEFAULT_PORT
    refresh_seconds: int = DEFAULT_REFRESH_SECONDS
    max_slabs_per_page: int = DEFAULT_MAX_SLABS_PER_PAGE
    slab_capacity: int = DEFAULT_SLAB_CAPACITY
    page_size: int = PAGE_SIZE
    warn_threshold: int = WARN_THRESHOLD
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    replay_dir: Path | None = None
    log_file: Path | None = None
    log_level: str = "WARNING"


def _env_positive(name: str, default: int | float, kind: type[int] | type[float]) -> int | float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = kind(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from None
    if value <= 0:
        raise ConfigError(f"{name} must be positive, got {raw!r}")
    return value


def settings_from_env() -> Settings:
    """Defaults for the CLI, overridable through HOWSIT_* variables."""
    return Settings(
        server=os.getenv("HOWSIT_SERVER", DEFAULT_SERVER),
        port=int(_env_positive("HOWSIT_PORT", DEFAULT_PORT, int)),
        refresh_seconds=int(_env_positive("HOWSIT_REFRESH_INTERVAL", DEFAULT_REFRESH_SECONDS, int)),
        max_slabs_per_page=int(_env_positive("HOWSIT_MAX_SLABS", DEFAULT_MAX_SLABS_PER_PAGE, int)),
        timeout_seconds=float(_env_positive("HOWSIT_TIMEOUT", DEFAULT_TIMEOUT_SECONDS, float)),
    )


def configure_logging(settings: Settings) -> None:
    # The terminal belongs to the TUI, so nothing may log to stderr while it runs.
    if settings.log_file is not None:
        handler: logging.Handler = logging.FileHandler(settings.log_file)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
    else:
        handler = TextualHandler()
    logging.basicConfig(level=settings.log_level.upper(), handlers=[handler], force=True)
