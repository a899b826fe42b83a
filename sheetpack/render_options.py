"""Render Options Dataclass

Page geometry and typography options for the pagination and rendering engine.
"""
from dataclasses import dataclass, field
from typing import Dict, Tuple

from .config import (
    PAGE_WIDTH,
    PAGE_HEIGHT,
    PAGE_MARGIN,
    LINE_HEIGHT,
    HEADER_RESERVATION,
    FOOTER_RESERVATION,
    FONT_SIZES,
)
from .exceptions import InvalidConfigurationError


@dataclass(frozen=True)
class PageLayout:
    """Geometry contract shared by the wrapper, paginator and renderer.

    All values are in pixels. The rendered page image is exactly
    ``width`` x ``height`` and the exported PDF uses the same numbers as its
    page size, so one pixel maps to one PDF point.

    Attributes:
        width: Page width
        height: Page height
        margin: Left/right margin; body text starts at ``margin``
        line_height: Vertical advance per body line
        header_reservation: Space above the first body line
        footer_reservation: Space kept free below the last body line
        font_sizes: Font size per role (see config.FONT_SIZES)
    """

    width: int = PAGE_WIDTH
    height: int = PAGE_HEIGHT
    margin: int = PAGE_MARGIN
    line_height: int = LINE_HEIGHT
    header_reservation: int = HEADER_RESERVATION
    footer_reservation: int = FOOTER_RESERVATION
    font_sizes: Dict[str, int] = field(default_factory=lambda: FONT_SIZES.copy())

    def __post_init__(self):
        """Validate geometry after initialization."""
        if self.width <= 0 or self.height <= 0:
            raise InvalidConfigurationError(
                f"Page size must be positive, got {self.width}x{self.height}"
            )
        if self.margin < 0 or 2 * self.margin >= self.width:
            raise InvalidConfigurationError(
                f"margin must leave a positive content width, got {self.margin} for width {self.width}"
            )
        if self.line_height <= 0:
            raise InvalidConfigurationError(
                f"line_height must be positive, got {self.line_height}"
            )
        if self.header_reservation < 0 or self.footer_reservation < 0:
            raise InvalidConfigurationError("Header and footer reservations cannot be negative")
        if self.content_height <= 0:
            raise InvalidConfigurationError(
                f"Header ({self.header_reservation}) and footer ({self.footer_reservation}) "
                f"reservations leave no room on a page of height {self.height}"
            )
        missing = set(FONT_SIZES) - set(self.font_sizes)
        if missing:
            raise InvalidConfigurationError(
                f"font_sizes is missing roles: {', '.join(sorted(missing))}"
            )

    @property
    def size(self) -> Tuple[int, int]:
        return (self.width, self.height)

    @property
    def content_width(self) -> int:
        """Maximum width available to a wrapped body line."""
        return self.width - 2 * self.margin

    @property
    def content_height(self) -> int:
        return self.height - self.header_reservation - self.footer_reservation

    @property
    def lines_per_page(self) -> int:
        """Whole body lines that fit on one page (never less than 1)."""
        return max(1, self.content_height // self.line_height)
