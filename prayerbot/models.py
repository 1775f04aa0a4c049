from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)

RAMADAN = "Ramadan"


@dataclass(frozen=True)
class District:
    en: str
    bn: str
    lat: float
    lon: float

    @classmethod
    def from_dict(cls, raw: Any) -> District | None:
        if not isinstance(raw, dict):
            return None
        en, bn = raw.get("en"), raw.get("bn")
        lat, lon = raw.get("lat"), raw.get("lon")
        if not isinstance(en, str) or not isinstance(bn, str) or not en.strip():
            return None
        # bool is an int subclass, so rule it out explicitly
        for v in (lat, lon):
            if isinstance(v, bool) or not isinstance(v, (int, float)):
                return None
        return cls(en=en.strip(), bn=bn.strip(), lat=float(lat), lon=float(lon))


def parse_districts(raw: Any) -> tuple[District, ...]:
    """Validate the remote district list. Keeps the first record per English name."""
    if not isinstance(raw, list):
        return ()

    seen: set[str] = set()
    out: list[District] = []
    for item in raw:
        d = District.from_dict(item)
        if d is None:
            logger.warning("Skipping malformed district record: %r", item)
            continue
        key = d.en.lower()
        if key in seen:
            logger.warning("Duplicate district %r ignored", d.en)
            continue
        seen.add(key)
        out.append(d)
    return tuple(out)


@dataclass(frozen=True)
class PrayerApi:
    name: str
    url: str
    enabled: bool = False

    @classmethod
    def from_dict(cls, raw: Any) -> PrayerApi | None:
        if not isinstance(raw, dict) or not isinstance(raw.get("url"), str):
            return None
        url = raw["url"]
        return cls(name=str(raw.get("name") or url), url=url, enabled=raw.get("enabled") is True)

    def build_url(self, date_str: str, lat: float, lon: float) -> str:
        return (
            self.url.replace("{date}", date_str)
            .replace("{lat}", str(lat))
            .replace("{lon}", str(lon))
        )


def parse_apis(raw: Any) -> tuple[PrayerApi, ...]:
    if not isinstance(raw, list):
        return ()
    apis = []
    for item in raw:
        api = PrayerApi.from_dict(item)
        if api is None:
            logger.warning("Skipping malformed API descriptor: %r", item)
            continue
        apis.append(api)
    return tuple(apis)


@dataclass(frozen=True)
class PrayerTimes:
    imsak: str
    fajr: str
    maghrib: str
    hijri_year: int
    hijri_month: str
    hijri_month_native: str
    hijri_day: int

    @property
    def is_ramadan(self) -> bool:
        # The API's English month name is the only signal used.
        return self.hijri_month == RAMADAN


def _pick(raw: Any, *path: str, default: str) -> str:
    node = raw
    for key in path:
        if not isinstance(node, dict):
            return default
        node = node.get(key)
    if isinstance(node, str) and node:
        return node
    return default


@dataclass(frozen=True)
class DisplayConfig:
    # text message
    label_district: str = "📍 জেলা"
    label_date: str = "📅 তারিখ"
    label_hijri: str = "📆 হিজরি"
    text_sehri: str = "🌙 সেহরির শেষ"
    text_fajr: str = "📢 ফজর"
    text_iftar: str = "🌅 ইফতার"
    text_maghrib: str = "🌅 মাগরিব"
    text_footer: str = "রাহা এআই - ২০২৬"
    hijri_month_format: str = "bn"

    # card palette
    color_background: str = "#0a472e"
    color_gold: str = "#ffd700"
    color_white: str = "#ffffff"
    color_gray: str = "#cccccc"
    color_sehri: str = "#ff6b6b"
    color_fajr: str = "#4ecdc4"
    color_iftar: str = "#ffd93d"
    color_maghrib: str = "#ffd93d"

    # card labels
    canvas_sehri: str = "SEHRI ENDS"
    canvas_fajr: str = "FAJR"
    canvas_iftar: str = "IFTAR"
    canvas_maghrib: str = "MAGHRIB"
    canvas_footer: str = "Raha AI - 2026"

    # used when every prayer API is down
    default_fajr: str = "০৫:০৬ AM"
    default_maghrib: str = "০৫:৫৪ PM"

    @property
    def english_months(self) -> bool:
        return self.hijri_month_format == "en"

    @classmethod
    def from_dict(cls, raw: Any) -> DisplayConfig:
        """Resolve the remote config document, falling back field by field."""
        d = cls()
        return cls(
            label_district=_pick(raw, "text", "labels", "district", default=d.label_district),
            label_date=_pick(raw, "text", "labels", "date", default=d.label_date),
            label_hijri=_pick(raw, "text", "labels", "hijri", default=d.label_hijri),
            text_sehri=_pick(raw, "text", "sehri", default=d.text_sehri),
            text_fajr=_pick(raw, "text", "fajr", default=d.text_fajr),
            text_iftar=_pick(raw, "text", "iftar", default=d.text_iftar),
            text_maghrib=_pick(raw, "text", "maghrib", default=d.text_maghrib),
            text_footer=_pick(raw, "text", "footer", default=d.text_footer),
            hijri_month_format=_pick(raw, "text", "hijriMonthFormat", default=d.hijri_month_format),
            color_background=_pick(raw, "canvas", "colors", "background", default=d.color_background),
            color_gold=_pick(raw, "canvas", "colors", "gold", default=d.color_gold),
            color_white=_pick(raw, "canvas", "colors", "white", default=d.color_white),
            color_gray=_pick(raw, "canvas", "colors", "gray", default=d.color_gray),
            color_sehri=_pick(raw, "canvas", "colors", "sehri", default=d.color_sehri),
            color_fajr=_pick(raw, "canvas", "colors", "fajr", default=d.color_fajr),
            color_iftar=_pick(raw, "canvas", "colors", "iftar", default=d.color_iftar),
            color_maghrib=_pick(raw, "canvas", "colors", "maghrib", default=d.color_maghrib),
            canvas_sehri=_pick(raw, "canvas", "sehri", default=d.canvas_sehri),
            canvas_fajr=_pick(raw, "canvas", "fajr", default=d.canvas_fajr),
            canvas_iftar=_pick(raw, "canvas", "iftar", default=d.canvas_iftar),
            canvas_maghrib=_pick(raw, "canvas", "maghrib", default=d.canvas_maghrib),
            canvas_footer=_pick(raw, "canvas", "footer", default=d.canvas_footer),
            default_fajr=_pick(raw, "defaultTimings", "fajr", default=d.default_fajr),
            default_maghrib=_pick(raw, "defaultTimings", "maghrib", default=d.default_maghrib),
        )
