import datetime as dt
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from prayerbot.card import CardRenderer
from prayerbot.config import Settings
from prayerbot.config_store import ConfigStore
from prayerbot.fetcher import PrayerTimeFetcher

DHAKA_TZ = dt.timezone(dt.timedelta(hours=6))

DISTRICTS_URL = "https://cfg.test/bd_districts.json"
DISPLAY_URL = "https://cfg.test/ramadan_config.json"
APIS_URL = "https://cfg.test/Prayer_apis.json"

DISTRICTS = [
    {"en": "Dhaka", "bn": "ঢাকা", "lat": 23.8103, "lon": 90.4125},
    {"en": "Chattogram", "bn": "চট্টগ্রাম", "lat": 22.3569, "lon": 91.7832},
    {"en": "Sylhet", "bn": "সিলেট", "lat": 24.8949, "lon": 91.8687},
]

FIFTEEN_DISTRICTS = DISTRICTS + [
    {"en": name, "bn": bn, "lat": 23.0, "lon": 90.0}
    for name, bn in [
        ("Rajshahi", "রাজশাহী"), ("Khulna", "খুলনা"), ("Barishal", "বরিশাল"),
        ("Rangpur", "রংপুর"), ("Mymensingh", "ময়মনসিংহ"), ("Cumilla", "কুমিল্লা"),
        ("Gazipur", "গাজীপুর"), ("Narayanganj", "নারায়ণগঞ্জ"), ("Bogura", "বগুড়া"),
        ("Jessore", "যশোর"), ("Pabna", "পাবনা"), ("Dinajpur", "দিনাজপুর"),
    ]
]

DISPLAY = {"canvas": {"footer": "Test Footer"}}

ALADHAN_URL = "https://api.aladhan.test/v1/timings/{date}?latitude={lat}&longitude={lon}"


def aladhan_payload(fajr="05:10", maghrib="18:05", imsak="05:00", month_en="Sha'ban",
                    month_ar="شَعْبَان", year="1447", day="12"):
    timings = {"Fajr": fajr, "Sunrise": "06:25", "Maghrib": maghrib}
    if imsak is not None:
        timings["Imsak"] = imsak
    return {
        "code": 200,
        "status": "OK",
        "data": {
            "timings": timings,
            "date": {
                "readable": "01 Feb 2026",
                "hijri": {
                    "day": day,
                    "year": year,
                    "month": {"number": 8, "en": month_en, "ar": month_ar},
                },
            },
        },
    }


def make_settings(tmp_path, **overrides) -> Settings:
    values = dict(
        token="test-token",
        admin_id=None,
        districts_url=DISTRICTS_URL,
        display_config_url=DISPLAY_URL,
        apis_url=APIS_URL,
        cache_dir=tmp_path / "cache",
        timezone=DHAKA_TZ,
        render_card=False,
    )
    values.update(overrides)
    return Settings(**values)


class Router:
    """httpx.MockTransport handler: maps URL prefixes to responses and records calls."""

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.calls = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        self.calls.append(url)
        for prefix, answer in self.routes.items():
            if url.startswith(prefix):
                if isinstance(answer, Exception):
                    raise answer
                if isinstance(answer, httpx.Response):
                    return answer
                return httpx.Response(200, json=answer)
        return httpx.Response(404, json={"error": "not found"})

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self))


def default_routes(apis=None, districts=None, payload=None):
    return {
        DISTRICTS_URL: DISTRICTS if districts is None else districts,
        DISPLAY_URL: DISPLAY,
        APIS_URL: apis if apis is not None else [
            {"name": "aladhan", "url": ALADHAN_URL, "enabled": True},
        ],
        "https://api.aladhan.test/": payload if payload is not None else aladhan_payload(),
    }


def make_bot_data(settings, router, cards=None):
    client = router.client()
    store = ConfigStore(settings, client)
    return {
        "settings": settings,
        "store": store,
        "fetcher": PrayerTimeFetcher(client, store),
        "cards": cards or CardRenderer(enabled=False),
    }


def make_message():
    placeholder = MagicMock()
    placeholder.delete = AsyncMock()
    message = MagicMock()
    message.reply_text = AsyncMock(return_value=placeholder)
    message.reply_photo = AsyncMock()
    message.placeholder = placeholder
    return message


@pytest.fixture
def settings(tmp_path):
    return make_settings(tmp_path)
