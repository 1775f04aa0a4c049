"""800x480 PNG card with the day's times.

The card is optional: when Pillow cannot be imported, or rendering is turned
off in the settings, `render_card` returns None and the bot answers with text
only.
"""
from __future__ import annotations

import io
import logging
from dataclasses import dataclass

from .formatter import PrayerInfo, pretty_date
from .models import DisplayConfig
from .utils import to_12_hour

try:
    from PIL import Image, ImageColor, ImageDraw, ImageFont
except ImportError:
    Image = None

logger = logging.getLogger(__name__)

WIDTH, HEIGHT = 800, 480
DIVIDER_Y = 220
BOX_TOP = 240
BOX_W, BOX_H, BOX_RADIUS = 200, 130, 10
TINT_ALPHA = 51  # 20 %

PILLOW_AVAILABLE = Image is not None


@dataclass(frozen=True)
class Box:
    x: int
    label: str
    value: str
    color: str


def box_layout(info: PrayerInfo, config: DisplayConfig, is_ramadan: bool) -> list[Box]:
    t = info.times
    if is_ramadan:
        return [
            Box(60, config.canvas_sehri, to_12_hour(t.imsak), config.color_sehri),
            Box(300, config.canvas_fajr, to_12_hour(t.fajr), config.color_fajr),
            Box(540, config.canvas_iftar, to_12_hour(t.maghrib), config.color_iftar),
        ]
    return [
        Box(150, config.canvas_fajr, to_12_hour(t.fajr), config.color_fajr),
        Box(450, config.canvas_maghrib, to_12_hour(t.maghrib), config.color_maghrib),
    ]


class CardRenderer:
    def __init__(self, enabled: bool = True, font_path: str | None = None,
                 font_bold_path: str | None = None):
        self.available = enabled and PILLOW_AVAILABLE
        self.font_path = font_path
        self.font_bold_path = font_bold_path or font_path
        self._fonts = {}
        if enabled and not PILLOW_AVAILABLE:
            logger.warning("Pillow not installed. Using text mode.")

    def _font(self, size: int, bold: bool = False):
        key = (size, bold)
        if key not in self._fonts:
            path = self.font_bold_path if bold else self.font_path
            if path:
                self._fonts[key] = ImageFont.truetype(path, size)
            else:
                self._fonts[key] = ImageFont.load_default(size=size)
        return self._fonts[key]

    def _text(self, draw, xy, text, font, fill):
        # coordinates are text baselines
        if isinstance(font, ImageFont.FreeTypeFont):
            draw.text(xy, text, font=font, fill=fill, anchor="ls")
        else:
            x, y = xy
            draw.text((x, y - getattr(font, "size", 11)), text, font=font, fill=fill)

    def _centered(self, draw, y, text, font, fill):
        width = draw.textlength(text, font=font)
        self._text(draw, ((WIDTH - width) / 2, y), text, font, fill)

    def _box(self, draw, box: Box, config: DisplayConfig):
        r, g, b = ImageColor.getrgb(box.color)[:3]
        xy = (box.x, BOX_TOP, box.x + BOX_W, BOX_TOP + BOX_H)
        draw.rounded_rectangle(xy, radius=BOX_RADIUS, fill=(r, g, b, TINT_ALPHA))
        draw.rounded_rectangle(xy, radius=BOX_RADIUS, outline=box.color, width=2)

        label_font = self._font(16, bold=True)
        value_font = self._font(28, bold=True)
        centre = box.x + BOX_W / 2
        lw = draw.textlength(box.label, font=label_font)
        vw = draw.textlength(box.value, font=value_font)
        self._text(draw, (centre - lw / 2, BOX_TOP + 40), box.label, label_font, config.color_white)
        self._text(draw, (centre - vw / 2, BOX_TOP + 100), box.value, value_font, box.color)

    def render(self, info: PrayerInfo, config: DisplayConfig, is_ramadan: bool) -> bytes | None:
        if not self.available:
            return None

        t = info.times
        img = Image.new("RGB", (WIDTH, HEIGHT), config.color_background)
        draw = ImageDraw.Draw(img, "RGBA")

        self._centered(draw, 60, f"{t.hijri_month} {t.hijri_year}", self._font(40, bold=True), config.color_gold)

        self._text(draw, (50, 130), info.district.en, self._font(25, bold=True), config.color_white)
        self._text(draw, (50, 165), pretty_date(info.day), self._font(16), config.color_gray)
        self._text(draw, (50, 195), info.hijri_date(english=True), self._font(16), config.color_gold)

        draw.line((40, DIVIDER_Y, 760, DIVIDER_Y), fill=config.color_gold, width=2)

        for box in box_layout(info, config, is_ramadan):
            self._box(draw, box, config)

        self._centered(draw, 430, config.canvas_footer, self._font(14), config.color_gold)

        buf = io.BytesIO()
        img.save(buf, format="PNG")
        return buf.getvalue()
