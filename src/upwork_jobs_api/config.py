import os

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

TRUTHY = {"1", "true", "yes", "on"}
FALSY = {"0", "false", "no", "off"}


def get_config() -> dict[str, str]:
    """
    Read configuration from environment variables.
    Called lazily so a bad value only fails when it is actually used.
    """
    return {
        "PORT": os.getenv("PORT", "3000"),
        "HOST": os.getenv("HOST", "0.0.0.0"),
        "HEADLESS": os.getenv("HEADLESS", "true"),
        "BROWSER_TIMEOUT_MS": os.getenv("BROWSER_TIMEOUT_MS", ""),
    }


def _positive_int(name: str, raw: str) -> int:
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be a positive integer, got '{raw}'") from None
    if value <= 0:
        raise ValueError(f"{name} must be a positive integer, got {value}")
    return value


class _Config:
    """Lazy configuration that only validates when values are actually accessed."""

    def __init__(self) -> None:
        self._config: dict[str, str] | None = None

    def _load(self) -> dict[str, str]:
        if self._config is None:
            self._config = get_config()
        return self._config

    @property
    def PORT(self) -> int:
        """Port the HTTP server listens on."""
        return _positive_int("PORT", self._load()["PORT"])

    @property
    def HOST(self) -> str:
        return self._load()["HOST"]

    @property
    def HEADLESS(self) -> bool:
        raw = self._load()["HEADLESS"].strip().lower()
        if raw in TRUTHY:
            return True
        if raw in FALSY:
            return False
        raise ValueError(f"HEADLESS must be a boolean flag, got '{raw}'")

    @property
    def BROWSER_TIMEOUT_MS(self) -> int | None:
        """Navigation/selector timeout in milliseconds. None keeps Playwright's defaults."""
        raw = self._load()["BROWSER_TIMEOUT_MS"]
        if not raw:
            return None
        return _positive_int("BROWSER_TIMEOUT_MS", raw)


_cfg = _Config()

# Module-level type declarations for mypy; values are resolved by __getattr__ below.
PORT: int
HOST: str
HEADLESS: bool
BROWSER_TIMEOUT_MS: int | None


# PEP 562: `from upwork_jobs_api.config import PORT` resolves on first access.
def __getattr__(name: str) -> str | int | bool | None:
    if name == "PORT":
        return _cfg.PORT
    if name == "HOST":
        return _cfg.HOST
    if name == "HEADLESS":
        return _cfg.HEADLESS
    if name == "BROWSER_TIMEOUT_MS":
        return _cfg.BROWSER_TIMEOUT_MS
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
