"""Document Model

Immutable value types flowing through one generation pass:
Segment -> Line (TextLine | DividerLine | ItemSeparatorLine) -> Page -> Document,
plus the rasterized RenderedPage handed to the exporter.
"""
import io
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Tuple, Union

from PIL import Image

from .config import BRAND_TITLE, FOOTER_LINES, SECTION_LABELS


class SegmentStyle(str, Enum):
    PLAIN = "plain"
    BOLD = "bold"
    CODE = "code"


@dataclass(frozen=True)
class Segment:
    """A styled run of text within a text line."""

    text: str
    style: SegmentStyle = SegmentStyle.PLAIN


@dataclass(frozen=True)
class TextLine:
    """A single visual row of text made of styled segments."""

    segments: Tuple[Segment, ...] = ()

    @property
    def text(self) -> str:
        """Visible text of the line (markup delimiters already stripped)."""
        return "".join(segment.text for segment in self.segments)

    @property
    def is_code(self) -> bool:
        return bool(self.segments) and all(
            segment.style is SegmentStyle.CODE for segment in self.segments
        )

    @property
    def is_blank(self) -> bool:
        return not self.text


@dataclass(frozen=True)
class DividerLine:
    """Thin rule marking a major-section boundary."""


@dataclass(frozen=True)
class ItemSeparatorLine:
    """Dashed rule plus caption between two items bundled into one pack."""


Line = Union[TextLine, DividerLine, ItemSeparatorLine]


@dataclass(frozen=True)
class Page:
    """A fixed-capacity slice of the wrapped line sequence."""

    index: int
    lines: Tuple[Line, ...] = ()

    @property
    def number(self) -> int:
        """1-based page number used in captions and file names."""
        return self.index + 1


@dataclass(frozen=True)
class DocumentMetadata:
    """Display metadata drawn in every page header and footer.

    Attributes:
        title: Bold header title
        board: Exam board (e.g. "WASSCE"), upper-cased in the subtitle
        year: Exam year as displayed
        subject: Subject string; only the part before " - " is shown
        mode: Trial or exam mode; a generation trigger, not drawn
        footer_lines: Two constant branding lines drawn in the footer
    """

    title: str = BRAND_TITLE
    board: str = ""
    year: str = ""
    subject: str = ""
    mode: str = "trial"
    footer_lines: Tuple[str, ...] = FOOTER_LINES

    @property
    def subtitle(self) -> str:
        short_subject = self.subject.split(" - ")[0]
        return f"{self.board.upper()} {self.year} • {short_subject}"

    def page_caption(self, index: int, total_pages: int) -> str:
        return f"Official Sheet • Page {index + 1} of {total_pages}"


@dataclass(frozen=True)
class IncludedSections:
    """Which named sub-sections a pack includes. Drives export naming only."""

    trials: bool = True
    solutions: bool = True
    guide: bool = True

    def labels(self) -> List[str]:
        """Label tokens of the included sections in stable order."""
        flags = (("trials", self.trials), ("solutions", self.solutions), ("guide", self.guide))
        return [SECTION_LABELS[name] for name, included in flags if included]


@dataclass(frozen=True)
class Document:
    """One generation's fully paginated content."""

    title: str
    subtitle_parts: Tuple[str, str, str]
    pages: Tuple[Page, ...]
    generation_id: int = 0

    @property
    def total_pages(self) -> int:
        return len(self.pages)

    @property
    def lines(self) -> List[Line]:
        return [line for page in self.pages for line in page.lines]


@dataclass(frozen=True)
class RenderedPage:
    """A rasterized page keyed by (generation_id, index).

    The image is never mutated after the renderer returns it.
    """

    generation_id: int
    index: int
    image: Image.Image = field(compare=False, repr=False)

    @property
    def key(self) -> Tuple[int, int]:
        """Identity used to order pages and detect duplicates on export."""
        return (self.generation_id, self.index)

    @property
    def size(self) -> Tuple[int, int]:
        return self.image.size

    def to_png_bytes(self) -> bytes:
        buffer = io.BytesIO()
        self.image.save(buffer, format="PNG")
        return buffer.getvalue()
