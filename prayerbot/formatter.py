from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Iterable

from .models import District, DisplayConfig, PrayerTimes
from .utils import to_12_hour

RULE = "═" * 20

MESSAGES = {
    "no_districts": "❌ জেলার তালিকা লোড করা যায়নি। আবার চেষ্টা করুন।",
    "help": (
        "🕌 নামাজের সময়\n\n"
        "জেলার নাম লিখুন:\n"
        "/ramadan dhaka\n"
        "/ramadan চট্টগ্রাম\n"
        "/ramadan sylhet tomorrow\n\n"
        "উদাহরণ:\n{sample}\n\n"
        "মোট {total}টি জেলা"
    ),
    "not_found": '❌ জেলা "{query}" খুঁজে পাওয়া যায়নি।\n\nসঠিক নাম লিখুন যেমন: ঢাকা, চট্টগ্রাম, সিলেট',
    "waiting": "⏳ {district} এর জন্য সময় আনা হচ্ছে...",
    "server_issue": "⚠️ সার্ভার সমস্যা",
    "signature": "♡🎀˚₊· ͟͟͞͞➳❥ 𝐑𝐚𝐡𝐚 𝐀𝐈 ࿐🎀 - ২০২৬",
    "apology": "❌ ত্রুটি হয়েছে। আবার চেষ্টা করুন।",
}


def pretty_date(day: dt.date) -> str:
    return day.strftime("%d %B, %Y")


@dataclass(frozen=True)
class PrayerInfo:
    district: District
    day: dt.date
    times: PrayerTimes

    def hijri_month(self, english: bool) -> str:
        return self.times.hijri_month if english else self.times.hijri_month_native

    def hijri_date(self, english: bool) -> str:
        t = self.times
        return f"{t.hijri_day} {self.hijri_month(english)} {t.hijri_year}"


def render_text(info: PrayerInfo, config: DisplayConfig, is_ramadan: bool) -> str:
    english = config.english_months
    t = info.times

    lines = [
        f"🕌 {info.hijri_month(english)} {t.hijri_year}",
        RULE,
        f"{config.label_district}: {info.district.bn}",
        f"{config.label_date}: {pretty_date(info.day)}",
        f"{config.label_hijri}: {info.hijri_date(english)}",
        RULE,
    ]
    if is_ramadan:
        lines.append(f"{config.text_sehri}: {to_12_hour(t.imsak)}")
        lines.append(f"{config.text_fajr}: {to_12_hour(t.fajr)}")
        lines.append(f"{config.text_iftar}: {to_12_hour(t.maghrib)}")
    else:
        lines.append(f"{config.text_fajr}: {to_12_hour(t.fajr)}")
        lines.append(f"{config.text_maghrib}: {to_12_hour(t.maghrib)}")
    lines.append(RULE)
    lines.append(config.text_footer)

    return "\n".join(lines)


def render_fallback(district: District, day: dt.date, config: DisplayConfig) -> str:
    """Static reply used when no prayer API could be reached."""
    return "\n".join([
        "🕌 নামাজের সময়",
        RULE,
        f"📍 জেলা: {district.bn}",
        f"📅 তারিখ: {pretty_date(day)}",
        RULE,
        f"📢 ফজর: {config.default_fajr}",
        f"🌅 মাগরিব: {config.default_maghrib}",
        RULE,
        MESSAGES["server_issue"],
        MESSAGES["signature"],
    ])


def render_help(sample_lines: Iterable[str], total: int) -> str:
    return MESSAGES["help"].format(sample="\n".join(sample_lines), total=total)
