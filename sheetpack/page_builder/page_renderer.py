"""Page Renderer Module

Rasterizes one Page into a fresh Pillow image:
1. solid background
2. low-opacity watermark rotated 45 degrees about the page centre
3. header (title, board/year/subject subtitle, "Page i of N" caption)
4. body lines (text segments, section dividers, item separators)
5. two centred footer branding lines

Every call draws on its own surface; no drawing state is shared between pages.
"""
import logging
from typing import Callable, Optional, Tuple

from PIL import Image, ImageDraw

from ..config import (
    COLORS,
    DASH_PATTERN,
    FOOTER_BASELINES_FROM_BOTTOM,
    PAGE_CAPTION_BASELINE,
    RULE_OFFSET,
    SEPARATOR_CAPTION,
    SEPARATOR_CAPTION_OFFSET,
    SUBTITLE_BASELINE,
    TITLE_BASELINE,
    WATERMARK_TEXT,
)
from ..document import (
    DividerLine,
    DocumentMetadata,
    ItemSeparatorLine,
    Line,
    Page,
    SegmentStyle,
    TextLine,
)
from ..exceptions import RenderingError, SurfaceCreationError
from ..render_options import PageLayout
from .font_manager import FontManager
from .text_measure import FontMeasurer, TextMeasurer, measure_text

logger = logging.getLogger(__name__)

SurfaceFactory = Callable[[Tuple[int, int], str], Image.Image]


def new_surface(size: Tuple[int, int], background: str) -> Image.Image:
    """Create an opaque RGB surface filled with the background colour."""
    return Image.new("RGB", size, background)


def draw_dashed_line(draw: ImageDraw.ImageDraw, x0: float, x1: float, y: float,
                     fill, width: int = 1, dash: Tuple[int, int] = DASH_PATTERN):
    """Draw a horizontal dashed rule from x0 to x1."""
    on, off = dash
    x = x0
    while x < x1:
        draw.line([(x, y), (min(x + on, x1), y)], fill=fill, width=width)
        x += on + off


class PageRenderer:
    """Renders pages with header, watermark, body and footer decoration.

    Attributes:
        layout: Page geometry and font sizes
        font_manager: Source of Pillow fonts
        measurer: Text measurement provider used for horizontal advances
        surface_factory: Callable(size, background) -> new RGB image
    """

    def __init__(
        self,
        layout: Optional[PageLayout] = None,
        font_manager: Optional[FontManager] = None,
        measurer: Optional[TextMeasurer] = None,
        surface_factory: Optional[SurfaceFactory] = None,
        watermark_text: str = WATERMARK_TEXT,
    ):
        self.layout = layout or PageLayout()
        self.font_manager = font_manager or FontManager(layout=self.layout)
        self.measurer = measurer or FontMeasurer(self.font_manager)
        self.surface_factory = surface_factory or new_surface
        self.watermark_text = watermark_text

    def render(self, page: Page, total_pages: int, metadata: DocumentMetadata) -> Image.Image:
        """
        Render one page.

        Args:
            page: Page to draw
            total_pages: Page count of the whole generation (for the caption)
            metadata: Title, subtitle fields and footer branding

        Returns:
            RGB image of exactly layout.width x layout.height pixels

        Raises:
            SurfaceCreationError: If the surface factory fails
            MeasurementError: If measuring a segment advance fails
        """
        image = self._create_surface()
        self._draw_watermark(image)

        draw = ImageDraw.Draw(image)
        self._draw_header(draw, page, total_pages, metadata)
        for position, line in enumerate(page.lines):
            y = self.layout.header_reservation + position * self.layout.line_height
            self._draw_line(draw, line, y)
        self._draw_footer(draw, metadata)

        logger.debug("Rendered page %d of %d (%d lines)", page.number, total_pages, len(page.lines))
        return image

    def _create_surface(self) -> Image.Image:
        size = self.layout.size
        try:
            image = self.surface_factory(size, COLORS["background"])
        except Exception as e:
            raise SurfaceCreationError(size, str(e)) from e
        if image is None:
            raise SurfaceCreationError(size, "surface factory returned no image")
        return image

    def _draw_watermark(self, image: Image.Image):
        width, height = self.layout.size
        layer = Image.new("RGBA", (width, height), (0, 0, 0, 0))
        font = self.font_manager.get_font("bold", self.layout.font_sizes["watermark"])
        ImageDraw.Draw(layer).text(
            (width / 2, height / 2), self.watermark_text,
            font=font, fill=COLORS["watermark"], anchor="mm",
        )
        layer = layer.rotate(45, resample=Image.Resampling.BICUBIC, center=(width / 2, height / 2))
        image.paste(layer, (0, 0), layer)

    def _draw_header(self, draw: ImageDraw.ImageDraw, page: Page, total_pages: int,
                     metadata: DocumentMetadata):
        sizes = self.layout.font_sizes
        center_x = self.layout.width / 2

        draw.text((center_x, TITLE_BASELINE), metadata.title,
                  font=self.font_manager.get_font("bold", sizes["title"]),
                  fill=COLORS["text"], anchor="ms")
        draw.text((center_x, SUBTITLE_BASELINE), metadata.subtitle,
                  font=self.font_manager.get_font("bold", sizes["subtitle"]),
                  fill=COLORS["accent"], anchor="ms")
        draw.text((center_x, PAGE_CAPTION_BASELINE), metadata.page_caption(page.index, total_pages),
                  font=self.font_manager.get_font("italic", sizes["page_caption"]),
                  fill=COLORS["muted"], anchor="ms")

    def _draw_line(self, draw: ImageDraw.ImageDraw, line: Line, y: float):
        margin = self.layout.margin
        right = self.layout.width - margin

        if isinstance(line, TextLine):
            if line.is_blank:
                return
            x = float(margin)
            for segment in line.segments:
                if not segment.text:
                    continue
                draw.text((x, y), segment.text,
                          font=self.font_manager.font_for_style(segment.style),
                          fill=COLORS["code"] if segment.style is SegmentStyle.CODE else COLORS["text"],
                          anchor="ls")
                x += measure_text(self.measurer, segment.text, segment.style)
        elif isinstance(line, DividerLine):
            draw.line([(margin, y - RULE_OFFSET), (right, y - RULE_OFFSET)],
                      fill=COLORS["divider"], width=1)
        elif isinstance(line, ItemSeparatorLine):
            draw_dashed_line(draw, margin, right, y - RULE_OFFSET, fill=COLORS["accent"], width=2)
            draw.text((self.layout.width / 2, y + SEPARATOR_CAPTION_OFFSET), SEPARATOR_CAPTION,
                      font=self.font_manager.get_font("bold", self.layout.font_sizes["separator_caption"]),
                      fill=COLORS["accent"], anchor="ms")
        else:
            raise RenderingError(f"Unsupported line type: {type(line).__name__}")

    def _draw_footer(self, draw: ImageDraw.ImageDraw, metadata: DocumentMetadata):
        font = self.font_manager.get_font("bold", self.layout.font_sizes["footer"])
        for text, offset in zip(metadata.footer_lines, FOOTER_BASELINES_FROM_BOTTOM):
            draw.text((self.layout.width / 2, self.layout.height - offset), text,
                      font=font, fill=COLORS["muted"], anchor="ms")
