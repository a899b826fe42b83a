"""Text Measurement Module

The (text, style) -> width capability consumed by the word wrapper and the
page renderer. Layout code only depends on the TextMeasurer protocol, so a
deterministic stub can stand in for real fonts.
"""
from typing import Optional, Protocol

from ..document import SegmentStyle
from ..exceptions import MeasurementError
from .font_manager import FontManager


class TextMeasurer(Protocol):
    """Anything that can report the rendered width of styled text."""

    def measure(self, text: str, style: SegmentStyle) -> float:
        ...


class FontMeasurer:
    """Measures text with the same Pillow fonts the page renderer draws with."""

    def __init__(self, font_manager: FontManager):
        self.font_manager = font_manager

    def measure(self, text: str, style: SegmentStyle) -> float:
        if not text:
            return 0.0
        return float(self.font_manager.font_for_style(style).getlength(text))


class FixedWidthMeasurer:
    """Deterministic measurer: every character has a fixed width per style.

    Useful for layout without fonts and for predictable test expectations.
    Bold and code widths default to the plain width.
    """

    def __init__(self, char_width: float = 10.0, bold_char_width: Optional[float] = None,
                 code_char_width: Optional[float] = None):
        self.widths = {
            SegmentStyle.PLAIN: char_width,
            SegmentStyle.BOLD: bold_char_width if bold_char_width is not None else char_width,
            SegmentStyle.CODE: code_char_width if code_char_width is not None else char_width,
        }

    def measure(self, text: str, style: SegmentStyle) -> float:
        return len(text) * self.widths[style]


def measure_text(measurer: TextMeasurer, text: str, style: SegmentStyle) -> float:
    """
    Measure text, converting any provider failure into MeasurementError.

    Args:
        measurer: Injected measurement provider
        text: Text to measure
        style: Segment style the text will be drawn with

    Returns:
        Width in pixels

    Raises:
        MeasurementError: If the provider raises
    """
    try:
        return measurer.measure(text, style)
    except MeasurementError:
        raise
    except Exception as e:
        raise MeasurementError(text, str(e)) from e
