"""Font Manager Module

Handles font lookup, Pillow font loading and the style -> font mapping shared
by text measurement and page rendering.
"""
import logging
import os
from typing import Dict, List, Optional, Tuple

from PIL import ImageFont

from ..config import FONT_DIR_ENV
from ..document import SegmentStyle
from ..exceptions import FontError
from ..render_options import PageLayout

logger = logging.getLogger(__name__)

_BUNDLED_FONT_DIR = os.path.join(os.path.dirname(__file__), '..', '..', 'fonts')

# File names per face, in order of preference
FONT_FILES = {
    "regular": ["DejaVuSans.ttf", "LiberationSans-Regular.ttf", "Arial.ttf", "arial.ttf"],
    "bold": ["DejaVuSans-Bold.ttf", "LiberationSans-Bold.ttf", "Arial Bold.ttf", "arialbd.ttf"],
    "italic": ["DejaVuSans-Oblique.ttf", "LiberationSans-Italic.ttf", "Arial Italic.ttf", "ariali.ttf"],
    "mono": ["DejaVuSansMono.ttf", "LiberationMono-Regular.ttf", "Courier New.ttf", "cour.ttf"],
}

SYSTEM_FONT_DIRS = [
    '/usr/share/fonts/truetype/dejavu',
    '/usr/share/fonts/dejavu',
    '/usr/share/fonts/TTF',
    '/usr/share/fonts/truetype/liberation',
    '/usr/share/fonts/liberation',
    '/System/Library/Fonts/Supplemental',  # macOS
    '/Library/Fonts',  # macOS
    'C:\\Windows\\Fonts',  # Windows
]


class FontManager:
    """Resolves TrueType fonts and hands out cached Pillow font objects.

    This class handles:
    - Font path lookups across the env-configured, bundled and system locations
    - Loading fonts with Pillow at a given pixel size
    - Fallback to Pillow's built-in scalable font when a face is missing
    - Mapping segment styles to the body fonts configured in a PageLayout

    Attributes:
        font_paths: Resolved file path per face, or None when the face falls
                    back to Pillow's default font
    """

    FACES = ("regular", "bold", "italic", "mono")

    def __init__(self, font_dir: Optional[str] = None, layout: Optional[PageLayout] = None):
        """
        Initialize FontManager and resolve a font file for every face.

        Args:
            font_dir: Optional directory searched first. Defaults to the
                      SHEETPACK_FONT_DIR environment variable.
            layout: Page layout supplying body font sizes for font_for_style()
        """
        self.font_dir = font_dir or os.getenv(FONT_DIR_ENV)
        self.layout = layout or PageLayout()
        self.font_paths: Dict[str, Optional[str]] = {}
        self._cache: Dict[Tuple[str, int], ImageFont.FreeTypeFont] = {}
        self._setup_fonts()

    def _search_dirs(self) -> List[str]:
        dirs = []
        if self.font_dir:
            dirs.append(self.font_dir)
        dirs.append(_BUNDLED_FONT_DIR)
        dirs.extend(SYSTEM_FONT_DIRS)
        return dirs

    def _setup_fonts(self):
        """
        Resolve a font file for each face.

        Tries every search directory for each candidate file name in order of
        preference. Faces with no match fall back to Pillow's default font,
        which renders consistently but looks plainer than DejaVu Sans.
        """
        search_dirs = self._search_dirs()
        for face in self.FACES:
            self.font_paths[face] = None
            for file_name in FONT_FILES[face]:
                candidates = [os.path.join(d, file_name) for d in search_dirs]
                found = next((path for path in candidates if os.path.exists(path)), None)
                if found:
                    self.font_paths[face] = found
                    logger.debug("Resolved %s font: %s", face, found)
                    break

            if self.font_paths[face] is None:
                logger.warning(
                    "No TrueType font found for '%s' face; using Pillow default font. "
                    "Install fonts-dejavu-core or set %s", face, FONT_DIR_ENV
                )

    def get_font(self, face: str, size: int) -> ImageFont.FreeTypeFont:
        """
        Get a loaded font for a face at a pixel size.

        Args:
            face: One of "regular", "bold", "italic", "mono"
            size: Font size in pixels

        Returns:
            Cached Pillow font object

        Raises:
            FontError: If the face is unknown or the font file cannot be loaded
        """
        if face not in self.FACES:
            raise FontError(f"Unknown font face '{face}'")

        key = (face, size)
        if key not in self._cache:
            path = self.font_paths.get(face)
            try:
                if path:
                    self._cache[key] = ImageFont.truetype(path, size)
                else:
                    self._cache[key] = ImageFont.load_default(size=size)
            except (OSError, ValueError) as e:
                raise FontError(f"Could not load {face} font at {size}px from {path or 'Pillow default'}: {e}")
        return self._cache[key]

    def font_for_style(self, style: SegmentStyle) -> ImageFont.FreeTypeFont:
        """
        Get the body font used for a segment style.

        Bold segments use the heavier, slightly larger bold face; code
        segments use the fixed-width face at the smaller code size.
        """
        sizes = self.layout.font_sizes
        if style is SegmentStyle.CODE:
            return self.get_font("mono", sizes["code"])
        if style is SegmentStyle.BOLD:
            return self.get_font("bold", sizes["body_bold"])
        return self.get_font("regular", sizes["body"])
