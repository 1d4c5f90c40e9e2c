from __future__ import annotations
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

# Bundled data lives next to the app
BASE_DIR = Path(__file__).resolve().parents[1]
DATA_DIR = BASE_DIR / "data"

_TRUE = {"1", "true", "yes", "y", "on"}


@dataclass(frozen=True)
class Settings:
    """Runtime configuration, read from DASHBOARD_* environment variables."""
    data_path: Path = DATA_DIR / "CIA_finaldata.csv"
    locations_path: Path = DATA_DIR / "country_locations.csv"
    remote_url: Optional[str] = None
    remote_key: Optional[str] = None
    remote_table: str = "country_data"
    request_timeout: float = 10.0
    log_level: str = "INFO"
    debug: bool = False

    @property
    def remote_enabled(self) -> bool:
        return bool(self.remote_url and self.remote_key)

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if env is None else env
        defaults = cls()

        def get(name: str) -> Optional[str]:
            value = env.get(f"DASHBOARD_{name}", "").strip()
            return value or None

        timeout = get("REQUEST_TIMEOUT")
        try:
            request_timeout = float(timeout) if timeout else defaults.request_timeout
        except ValueError:
            request_timeout = defaults.request_timeout

        return cls(
            data_path=Path(get("DATA_PATH") or defaults.data_path),
            locations_path=Path(get("LOCATIONS_PATH") or defaults.locations_path),
            remote_url=get("REMOTE_URL"),
            remote_key=get("REMOTE_KEY"),
            remote_table=get("REMOTE_TABLE") or defaults.remote_table,
            request_timeout=request_timeout,
            log_level=(get("LOG_LEVEL") or defaults.log_level).upper(),
            debug=(get("DEBUG") or "").lower() in _TRUE,
        )


def configure_logging(settings: Settings) -> None:
    """Process-wide logging setup; called once from app.py."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
