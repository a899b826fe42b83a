"""Configuration Constants

Constants for page geometry, typography and branding used by the
pagination and rendering engine.

Changing any geometry or font value changes rendered output pixel-for-pixel.
Bump LAYOUT_VERSION whenever that happens so stored layouts can be compared.
"""

LAYOUT_VERSION = 1

# Page Geometry (pixels)
PAGE_WIDTH = 1000
PAGE_HEIGHT = 1414
PAGE_MARGIN = 80
LINE_HEIGHT = 34
HEADER_RESERVATION = 180
FOOTER_RESERVATION = 120

# Font Sizes (pixels)
FONT_SIZES = {
    "body": 20,
    "body_bold": 21,
    "code": 16,
    "title": 42,
    "subtitle": 20,
    "page_caption": 14,
    "separator_caption": 12,
    "footer": 12,
    "watermark": 160,
}

# Colors
COLORS = {
    "background": "#ffffff",
    "text": "#111827",
    "code": "#065f46",
    "accent": "#059669",
    "muted": "#9ca3af",
    "divider": "#e5e7eb",
    "watermark": (5, 150, 105, 8),  # ~3% opacity
}

# Header/Footer Baselines (pixels from top / from bottom)
TITLE_BASELINE = 80
SUBTITLE_BASELINE = 115
PAGE_CAPTION_BASELINE = 145
FOOTER_BASELINES_FROM_BOTTOM = (70, 50)

# Rule Drawing
RULE_OFFSET = 10  # rules sit this far above the line baseline
SEPARATOR_CAPTION_OFFSET = 15
DASH_PATTERN = (5, 5)

# Branding
BRAND_TITLE = "Mr. Wise Legit Source"
WATERMARK_TEXT = "MR. WISE LEGIT"
FOOTER_LINES = (
    "THE LEGIT SOURCE FOR WAEC EXAMS • PREPARED BY MR. WISE LEGIT SOURCE",
    "+233 20 768 9520 | +233 25 631 1834",
)
SEPARATOR_CAPTION = "NEXT ITEM IN PACK"

# Markup
BOLD_DELIMITER = "*"
CODE_FENCE = "```"
ITEM_SEPARATOR = "-" * 40
DIVIDER_TRIGGERS = ("*QUESTIONS*", "*SOLUTIONS*", "*TUTOR GUIDE*")

# Export Naming
SECTION_LABELS = {
    "trials": "Trials",
    "solutions": "Solutions",
    "guide": "Guide",
}
DEFAULT_SUBJECT = "General-Studies"

# Display Metadata Options
EXAM_BOARDS = ("WASSCE", "NOV/DEC", "NABTEB")
APP_MODES = ("trial", "exam")

# Environment
FONT_DIR_ENV = "SHEETPACK_FONT_DIR"
