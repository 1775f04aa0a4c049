import os
from dataclasses import dataclass
from pathlib import Path
from zoneinfo import ZoneInfo

from dotenv import load_dotenv

DEFAULT_BASE_URL = "https://raw.githubusercontent.com/washik02/Ramadan-/main/"

CONFIG_TIMEOUT = 10.0  # seconds, remote config documents
API_TIMEOUT = 8.0  # seconds, per prayer API attempt
IMAGE_TTL = 10  # seconds before a sent card is removed from disk


def _flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    token: str
    admin_id: str | None
    districts_url: str
    display_config_url: str
    apis_url: str
    cache_dir: Path
    timezone: ZoneInfo
    render_card: bool = True
    font_path: str | None = None
    font_bold_path: str | None = None
    heartbeat_seconds: int = 60

    @property
    def districts_cache(self) -> Path:
        return self.cache_dir / "bd_districts.json"

    @property
    def display_config_cache(self) -> Path:
        return self.cache_dir / "ramadan_config.json"

    @property
    def apis_cache(self) -> Path:
        return self.cache_dir / "Prayer_apis.json"


def load_settings() -> Settings:
    """Read settings from the environment (and `.env`, if present)."""
    load_dotenv()

    base = os.getenv("CONFIG_BASE_URL", DEFAULT_BASE_URL)
    if not base.endswith("/"):
        base += "/"

    return Settings(
        token=os.getenv("TELEGRAM_BOT_TOKEN", ""),
        admin_id=os.getenv("ADMIN_ID") or None,
        districts_url=os.getenv("DISTRICTS_URL", f"{base}bd_districts.json"),
        display_config_url=os.getenv("DISPLAY_CONFIG_URL", f"{base}ramadan_config.json"),
        apis_url=os.getenv("APIS_URL", f"{base}Prayer_apis.json"),
        cache_dir=Path(os.getenv("CACHE_DIR", os.path.abspath("cache"))),
        timezone=ZoneInfo(os.getenv("BOT_TIMEZONE", "Asia/Dhaka")),
        render_card=_flag("RENDER_CARD", True),
        font_path=os.getenv("CARD_FONT_PATH") or None,
        font_bold_path=os.getenv("CARD_FONT_BOLD_PATH") or None,
        heartbeat_seconds=int(os.getenv("HEARTBEAT_SECONDS", "60")),
    )
