"""Page Builder Package

This package provides the layout and rasterization components that turn a
marked-up text payload into rendered pages:

Core Classes:
- MarkupLineProcessor: Raw text -> typed lines with bold/code segments
- FontManager: Font lookup and Pillow font loading
- FontMeasurer / FixedWidthMeasurer: Text measurement providers
- PageRenderer: One Page -> one decorated page image

Helper Functions:
- process_markup: Run the markup processor over a content string
- wrap_lines: Greedy word wrap to a fixed content width
- paginate: Slice wrapped lines into fixed-capacity pages
"""

from .markup import MarkupLineProcessor, process_markup, split_bold_segments, starts_with_trigger
from .font_manager import FontManager
from .text_measure import TextMeasurer, FontMeasurer, FixedWidthMeasurer, measure_text
from .line_wrapper import wrap_lines, wrap_text_line
from .paginator import paginate, lines_per_page, count_pages
from .page_renderer import PageRenderer, new_surface

__all__ = [
    # Markup
    'MarkupLineProcessor',
    'process_markup',
    'split_bold_segments',
    'starts_with_trigger',

    # Fonts and measurement
    'FontManager',
    'TextMeasurer',
    'FontMeasurer',
    'FixedWidthMeasurer',
    'measure_text',

    # Layout
    'wrap_lines',
    'wrap_text_line',
    'paginate',
    'lines_per_page',
    'count_pages',

    # Rendering
    'PageRenderer',
    'new_surface',
]
