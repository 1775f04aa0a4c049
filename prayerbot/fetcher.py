from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from .config import API_TIMEOUT
from .config_store import ConfigStore
from .errors import AllApisFailed, InvalidResponseStructure, NoActiveApis
from .models import District, PrayerApi, PrayerTimes
from .utils import parse_hhmm

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Attempt:
    api: PrayerApi
    times: PrayerTimes | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.times is not None


def extract_times(payload: Any) -> PrayerTimes:
    """Pull the timings and hijri date out of an Aladhan-shaped response."""
    data = payload.get("data") if isinstance(payload, dict) else None
    timings = data.get("timings") if isinstance(data, dict) else None
    date = data.get("date") if isinstance(data, dict) else None
    hijri = date.get("hijri") if isinstance(date, dict) else None
    if not isinstance(timings, dict) or not isinstance(hijri, dict):
        raise InvalidResponseStructure("Invalid API response structure")

    fajr = parse_hhmm(timings.get("Fajr"))
    maghrib = parse_hhmm(timings.get("Maghrib"))
    if fajr is None or maghrib is None:
        raise InvalidResponseStructure(
            f"Unusable Fajr/Maghrib: {timings.get('Fajr')!r}/{timings.get('Maghrib')!r}"
        )

    month = hijri.get("month")
    if not isinstance(month, dict) or not month.get("en"):
        raise InvalidResponseStructure("Hijri month missing")
    try:
        year, day = int(hijri["year"]), int(hijri["day"])
    except (KeyError, TypeError, ValueError) as e:
        raise InvalidResponseStructure(f"Bad hijri date: {e}") from e

    return PrayerTimes(
        imsak=parse_hhmm(timings.get("Imsak")) or fajr,
        fajr=fajr,
        maghrib=maghrib,
        hijri_year=year,
        hijri_month=str(month["en"]),
        hijri_month_native=str(month.get("ar") or month["en"]),
        hijri_day=day,
    )


class PrayerTimeFetcher:
    """Asks each enabled prayer API in turn; the first usable answer wins."""

    def __init__(self, client: httpx.AsyncClient, store: ConfigStore):
        self.client = client
        self.store = store

    async def _attempt(self, api: PrayerApi, district: District, date_str: str) -> Attempt:
        url = api.build_url(date_str, district.lat, district.lon)
        logger.info("Trying API: %s -> %s", api.name, url)
        try:
            response = await self.client.get(url, timeout=API_TIMEOUT)
            response.raise_for_status()
            return Attempt(api, times=extract_times(response.json()))
        except (httpx.HTTPError, httpx.InvalidURL, ValueError, InvalidResponseStructure) as e:
            # ValueError covers a body that is not JSON
            logger.warning("❌ API %s failed: %s", api.name, e)
            return Attempt(api, error=e)

    async def fetch(self, district: District, date_str: str) -> PrayerTimes:
        active = [api for api in self.store.snapshot.apis if api.enabled]
        if not active:
            raise NoActiveApis()

        last_error = None
        for api in active:
            attempt = await self._attempt(api, district, date_str)
            if attempt.ok:
                return attempt.times
            last_error = attempt.error

        raise AllApisFailed(last_error)
