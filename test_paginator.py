"""Tests for page geometry and pagination."""
import math

import pytest

from sheetpack import DocumentMetadata, PageLayout, build_document, compose_pack, PackItem, IncludedSections
from sheetpack.document import ItemSeparatorLine, Segment, TextLine
from sheetpack.exceptions import InvalidConfigurationError
from sheetpack.page_builder import FixedWidthMeasurer, count_pages, lines_per_page, paginate


def make_lines(count):
    return [TextLine((Segment(f"line {i}"),)) for i in range(count)]


class TestPageLayout:
    def test_default_geometry(self):
        layout = PageLayout()
        assert layout.size == (1000, 1414)
        assert layout.content_width == 840
        assert layout.content_height == 1414 - 180 - 120
        assert layout.lines_per_page == 32

    def test_lines_per_page_is_floor(self):
        layout = PageLayout(height=400, header_reservation=100, footer_reservation=100, line_height=30)
        assert lines_per_page(layout) == math.floor(200 / 30)

    def test_lines_per_page_is_at_least_one(self):
        layout = PageLayout(height=300, header_reservation=100, footer_reservation=100, line_height=150)
        assert lines_per_page(layout) == 1

    @pytest.mark.parametrize("kwargs", [
        {"width": 0},
        {"margin": 500},
        {"line_height": 0},
        {"header_reservation": 800, "footer_reservation": 700},
        {"footer_reservation": -1},
        {"font_sizes": {"body": 20}},
    ])
    def test_invalid_geometry_rejected(self, kwargs):
        with pytest.raises(InvalidConfigurationError):
            PageLayout(**kwargs)


class TestPaginate:
    def test_empty_input_gives_one_empty_page(self):
        pages = paginate([], PageLayout())
        assert len(pages) == 1
        assert pages[0].index == 0
        assert pages[0].lines == ()

    @pytest.mark.parametrize("count,expected", [(1, 1), (32, 1), (33, 2), (64, 2), (65, 3)])
    def test_total_pages_is_ceiling(self, count, expected):
        assert count_pages(count, 32) == expected
        assert len(paginate(make_lines(count), PageLayout())) == expected

    def test_pages_partition_lines_in_order(self):
        lines = make_lines(70)
        pages = paginate(lines, PageLayout())

        assert [len(page.lines) for page in pages] == [32, 32, 6]
        assert [page.index for page in pages] == [0, 1, 2]
        flattened = [line for page in pages for line in page.lines]
        assert flattened == lines
        assert sum(len(page.lines) for page in pages) == len(lines)

    def test_pagination_is_deterministic(self):
        lines = make_lines(45)
        assert paginate(lines, PageLayout()) == paginate(lines, PageLayout())


class TestBuildDocument:
    def test_empty_content_has_one_page(self):
        document = build_document("", DocumentMetadata(), PageLayout(), FixedWidthMeasurer())
        assert document.total_pages == 1

    def test_short_items_share_a_page_around_separator(self):
        items = [PackItem("Physics", "WASSCE", "2023", test="Q1"), PackItem("Biology", "WASSCE", "2023", test="Q2")]
        content = compose_pack(items, IncludedSections(True, False, False))
        document = build_document(content, DocumentMetadata(subject="Science"), PageLayout(), FixedWidthMeasurer())

        assert document.total_pages == 1
        lines = document.pages[0].lines
        separators = [i for i, line in enumerate(lines) if isinstance(line, ItemSeparatorLine)]
        assert len(separators) == 1
        assert 0 < separators[0] < len(lines) - 1

    def test_line_count_matches_wrapped_lines(self):
        content = "\n".join(f"*{i}.* " + "word " * 30 for i in range(40))
        layout = PageLayout()
        document = build_document(content, DocumentMetadata(), layout, FixedWidthMeasurer())

        line_count = len(document.lines)
        assert document.total_pages == math.ceil(line_count / layout.lines_per_page)
        assert document.subtitle_parts == ("", "", "")
