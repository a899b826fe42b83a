"""Paginator Module

Slices the wrapped line sequence into pages of fixed line capacity.

Lines are atomic: a page boundary always falls between two lines, pages are
filled contiguously in order, and there is no look-ahead balancing.
"""
import math
from typing import List, Sequence

from ..document import Line, Page
from ..render_options import PageLayout


def lines_per_page(layout: PageLayout) -> int:
    """
    Number of body lines that fit on one page.

    floor((height - header_reservation - footer_reservation) / line_height),
    never less than 1.

    Examples:
        >>> lines_per_page(PageLayout())  # (1414 - 180 - 120) // 34
        32
    """
    return layout.lines_per_page


def count_pages(line_count: int, per_page: int) -> int:
    """ceil(line_count / per_page), with an empty document still getting one page."""
    return max(1, math.ceil(line_count / max(1, per_page)))


def paginate(lines: Sequence[Line], layout: PageLayout) -> List[Page]:
    """
    Split lines into pages.

    Args:
        lines: Wrapped lines in display order
        layout: Page geometry

    Returns:
        Pages with 0-based indices; concatenating their lines reproduces the input
    """
    per_page = lines_per_page(layout)
    total_pages = count_pages(len(lines), per_page)
    return [
        Page(index=p, lines=tuple(lines[p * per_page:(p + 1) * per_page]))
        for p in range(total_pages)
    ]
