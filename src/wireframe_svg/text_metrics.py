from __future__ import annotations

import io
import logging
import threading
from dataclasses import dataclass
from typing import Mapping, Protocol, Sequence

from PIL import ImageFont

from .errors import FontLoadError

logger = logging.getLogger(__name__)

DEFAULT_FONT_SIZE_PX = 13

# Pillow has no font registry of its own, so generic CSS families map to
# file names it can find on the usual font paths.
GENERIC_FONT_FILES: Mapping[str, Mapping[tuple[bool, bool], Sequence[str]]] = {
    "sans-serif": {
        (False, False): ("DejaVuSans.ttf", "Arial.ttf", "LiberationSans-Regular.ttf"),
        (True, False): ("DejaVuSans-Bold.ttf", "Arial Bold.ttf", "LiberationSans-Bold.ttf"),
        (False, True): ("DejaVuSans-Oblique.ttf", "Arial Italic.ttf", "LiberationSans-Italic.ttf"),
        (True, True): ("DejaVuSans-BoldOblique.ttf", "Arial Bold Italic.ttf", "LiberationSans-BoldItalic.ttf"),
    },
    "serif": {
        (False, False): ("DejaVuSerif.ttf", "Times New Roman.ttf", "LiberationSerif-Regular.ttf"),
        (True, False): ("DejaVuSerif-Bold.ttf", "Times New Roman Bold.ttf", "LiberationSerif-Bold.ttf"),
        (False, True): ("DejaVuSerif-Italic.ttf", "Times New Roman Italic.ttf", "LiberationSerif-Italic.ttf"),
        (True, True): ("DejaVuSerif-BoldItalic.ttf", "Times New Roman Bold Italic.ttf", "LiberationSerif-BoldItalic.ttf"),
    },
    "monospace": {
        (False, False): ("DejaVuSansMono.ttf", "Courier New.ttf", "LiberationMono-Regular.ttf"),
        (True, False): ("DejaVuSansMono-Bold.ttf", "Courier New Bold.ttf", "LiberationMono-Bold.ttf"),
        (False, True): ("DejaVuSansMono-Oblique.ttf", "Courier New Italic.ttf", "LiberationMono-Italic.ttf"),
        (True, True): ("DejaVuSansMono-BoldOblique.ttf", "Courier New Bold Italic.ttf", "LiberationMono-BoldItalic.ttf"),
    },
}


@dataclass(frozen=True)
class FontSpec:
    style: str
    weight: str
    size: str
    family: str

    @property
    def css(self) -> str:
        return f"{self.style} {self.weight} {self.size} {self.family}"

    @property
    def size_px(self) -> float:
        try:
            return float(self.size.removesuffix("px"))
        except ValueError:
            return float(DEFAULT_FONT_SIZE_PX)

    @property
    def bold(self) -> bool:
        return self.weight == "bold"

    @property
    def italic(self) -> bool:
        return self.style == "italic"


@dataclass(frozen=True)
class TextMetrics:
    width: float
    ascent: float


class TextMeasurer(Protocol):
    def measure(self, text: str, font: FontSpec) -> TextMetrics:
        ...

    def register_font(self, family: str, data: bytes) -> None:
        ...


class PillowTextMeasurer:
    """Measures text with Pillow fonts.

    ``ascent`` is the distance from the baseline to the top of the inked
    glyphs of the given string, not the font-wide ascender. Instances may be
    shared between worker threads.
    """

    def __init__(self) -> None:
        self._registered: dict[str, bytes] = {}
        self._font_cache: dict[tuple[str, bool, bool, int], ImageFont.FreeTypeFont | ImageFont.ImageFont] = {}
        self._lock = threading.RLock()

    def register_font(self, family: str, data: bytes) -> None:
        try:
            ImageFont.truetype(io.BytesIO(data), DEFAULT_FONT_SIZE_PX)
        except OSError as exc:
            raise FontLoadError(f"family {family!r}", f"unreadable font data ({exc})") from exc
        key = _normalize_family(family)
        with self._lock:
            self._registered[key] = data
            self._font_cache = {
                cache_key: font for cache_key, font in self._font_cache.items() if cache_key[0] != key
            }
        logger.info("Registered font", extra={"font_family": family, "bytes": len(data)})

    def measure(self, text: str, font: FontSpec) -> TextMetrics:
        if not text:
            return TextMetrics(width=0.0, ascent=0.0)
        with self._lock:
            return self._measure(text, font)

    def _measure(self, text: str, font: FontSpec) -> TextMetrics:
        pil_font = self._font(font)
        if isinstance(pil_font, ImageFont.FreeTypeFont):
            width = pil_font.getlength(text)
            _, top, _, _ = pil_font.getbbox(text, anchor="ls")
            ascent = float(-top)
        else:
            left, top, right, bottom = pil_font.getbbox(text)
            width = float(right - left)
            ascent = float(bottom - top)
        return TextMetrics(width=float(width), ascent=ascent)

    def _font(self, font: FontSpec) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
        size = max(1, int(round(font.size_px)))
        family = _normalize_family(font.family)
        key = (family, font.bold, font.italic, size)
        cached = self._font_cache.get(key)
        if cached is not None:
            return cached

        loaded = self._load(family, font.bold, font.italic, size)
        self._font_cache[key] = loaded
        return loaded

    def _load(self, family: str, bold: bool, italic: bool, size: int) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
        data = self._registered.get(family)
        if data is not None:
            return ImageFont.truetype(io.BytesIO(data), size)

        candidates = list(GENERIC_FONT_FILES.get(family, {}).get((bold, italic), ()))
        if family not in GENERIC_FONT_FILES:
            candidates.append(f"{family}.ttf")
        candidates.extend(GENERIC_FONT_FILES["sans-serif"][(bold, italic)])
        for candidate in candidates:
            try:
                return ImageFont.truetype(candidate, size)
            except OSError:
                continue

        logger.debug("Falling back to Pillow default font", extra={"font_family": family, "size": size})
        return ImageFont.load_default(size=size)


def _normalize_family(family: str) -> str:
    return family.strip().strip("'\"").lower()


__all__ = [
    "DEFAULT_FONT_SIZE_PX",
    "FontSpec",
    "PillowTextMeasurer",
    "TextMeasurer",
    "TextMetrics",
]
