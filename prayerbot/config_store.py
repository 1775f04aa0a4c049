from __future__ import annotations

import json
import logging
import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import httpx

from .config import CONFIG_TIMEOUT, Settings
from .errors import RemoteFetchFailed
from .models import District, DisplayConfig, PrayerApi, parse_apis, parse_districts

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConfigSnapshot:
    districts: tuple[District, ...] = ()
    display: DisplayConfig = field(default_factory=DisplayConfig)
    apis: tuple[PrayerApi, ...] = ()
    # True when the display document itself was empty/missing
    display_empty: bool = True

    @property
    def incomplete(self) -> bool:
        return not self.districts or self.display_empty or not self.apis


def read_json(path: Path) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def write_json(path: Path, data: Any) -> None:
    """Write `data` next to `path` first, then move it into place."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False)
        os.replace(tmp, path)
    except BaseException:
        if os.path.exists(tmp):
            os.unlink(tmp)
        raise


class ConfigStore:
    """Holds the districts, display config and API list.

    Each document is fetched from its remote URL and mirrored to a local cache
    file; the cache is the fallback when the remote is down. The current state
    is exposed as one immutable snapshot that is swapped on every reload.
    """

    def __init__(self, settings: Settings, client: httpx.AsyncClient):
        self.settings = settings
        self.client = client
        self.snapshot = ConfigSnapshot()

    async def _fetch(self, url: str) -> Any:
        try:
            response = await self.client.get(url, timeout=CONFIG_TIMEOUT)
            response.raise_for_status()
            return response.json()
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
            raise RemoteFetchFailed(f"{url}: {e}") from e

    async def load(self, url: str, cache_path: Path, default: Any) -> Any:
        try:
            data = await self._fetch(url)
        except RemoteFetchFailed as e:
            logger.warning("Remote fetch failed (%s), trying cache...", e)
        else:
            # a JSON null body is a successful fetch with nothing in it
            if data is None:
                logger.warning("Empty document at %s", url)
                return default
            try:
                write_json(cache_path, data)
            except OSError as e:
                logger.error("Could not write cache %s: %s", cache_path, e)
            logger.info("Loaded: %s", url)
            return data

        if cache_path.exists():
            try:
                return read_json(cache_path)
            except (OSError, ValueError) as e:
                logger.error("Unreadable cache %s: %s", cache_path, e)
        return default

    async def load_all(self) -> ConfigSnapshot:
        s = self.settings
        raw_districts = await self.load(s.districts_url, s.districts_cache, [])
        raw_display = await self.load(s.display_config_url, s.display_config_cache, {})
        raw_apis = await self.load(s.apis_url, s.apis_cache, [])

        snapshot = ConfigSnapshot(
            districts=parse_districts(raw_districts),
            display=DisplayConfig.from_dict(raw_display),
            apis=parse_apis(raw_apis),
            display_empty=not (isinstance(raw_display, dict) and raw_display),
        )

        if not snapshot.districts:
            logger.error("❌ No districts loaded!")
        if snapshot.display_empty:
            logger.error("❌ No config loaded!")
        if not snapshot.apis:
            logger.error("❌ No APIs loaded!")

        self.snapshot = snapshot
        return snapshot

    async def ensure_loaded(self) -> ConfigSnapshot:
        if self.snapshot.incomplete:
            return await self.load_all()
        return self.snapshot
