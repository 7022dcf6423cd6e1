"""
Label layout for the quote menu.

Menu fonts are proportional, so symbols of the same length do not have the
same width. Each label is padded with figure spaces according to the pixel
width of its symbol so that the prices start at roughly the same position.
The result is a heuristic: misalignment stays below the width of one pad
glyph but is not pixel exact.
"""
import math
from dataclasses import dataclass

from PIL import Image, ImageDraw, ImageFont

# Figure space. Never part of a ticker, so it doubles as the delimiter
# symbol_from_label() splits on.
PAD_CHAR = "\u2007"
SEPARATOR = "\t"
QUOTE_UNKNOWN = "???"
PRICE_FIELD_WIDTH = 8
DEFAULT_FONT_SIZE = 14

UNKNOWN_QUOTE = None


def is_known_quote(quote):
    """True for a finite, non-negative int or float price."""
    if isinstance(quote, bool) or not isinstance(quote, (int, float)):
        return False
    if isinstance(quote, int):
        return quote >= 0
    return math.isfinite(quote) and quote >= 0


class WidthMeasurer:
    """Measures text in pixels with the default font; the drawing context is built once."""

    def __init__(self, font=None, font_size=DEFAULT_FONT_SIZE):
        self.font = font if font is not None else ImageFont.load_default(size=font_size)
        self._draw = ImageDraw.Draw(Image.new("RGB", (1, 1)))

    def measure(self, text):
        if not text:
            return 0
        return max(0, int(round(self._draw.textlength(text, font=self.font))))


@dataclass(frozen=True)
class LayoutMetrics:
    pad_width: int
    max_width: int

    @classmethod
    def compute(cls, measurer, symbols):
        # A font without the pad glyph may report zero width
        pad_width = max(1, measurer.measure(PAD_CHAR))
        max_width = max((measurer.measure(symbol) for symbol in symbols), default=0)
        return cls(pad_width=pad_width, max_width=max_width)


class LabelFormatter:
    """Builds ``<symbol><pad><TAB><price>`` labels aligned across the menu."""

    def __init__(self, measurer, symbols=()):
        self.measurer = measurer
        self.metrics = LayoutMetrics.compute(measurer, symbols)

    def update_symbols(self, symbols):
        """Recomputes the layout metrics for a new symbol set."""
        self.metrics = LayoutMetrics.compute(self.measurer, symbols)
        return self.metrics

    def pad_count(self, symbol):
        """
        Total length of the padded symbol field.

        The pixel shortfall against the widest symbol is converted into a number
        of pad glyphs, then the symbol's own length plus one separating glyph is
        added because ljust() pads the whole string, not just the deficit.
        """
        cur_width = self.measurer.measure(symbol)
        return (self.metrics.max_width - cur_width) // self.metrics.pad_width + len(symbol) + 1

    def format_price(self, quote):
        if not is_known_quote(quote):
            return QUOTE_UNKNOWN
        return f"{float(quote):.2f}".rjust(PRICE_FIELD_WIDTH, PAD_CHAR)

    def format(self, symbol, quote=UNKNOWN_QUOTE):
        return symbol.ljust(self.pad_count(symbol), PAD_CHAR) + SEPARATOR + self.format_price(quote)


def symbol_from_label(label):
    """Recovers the symbol from a formatted label (everything before the first pad glyph)."""
    return label.split(PAD_CHAR, 1)[0]
