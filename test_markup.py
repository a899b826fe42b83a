"""Tests for the markup line processor."""
import pytest

from sheetpack.config import ITEM_SEPARATOR
from sheetpack.document import DividerLine, ItemSeparatorLine, Segment, SegmentStyle, TextLine
from sheetpack.exceptions import InvalidContentError
from sheetpack.page_builder import MarkupLineProcessor, process_markup, split_bold_segments

BOLD = SegmentStyle.BOLD
PLAIN = SegmentStyle.PLAIN
CODE = SegmentStyle.CODE


class TestBoldSegments:
    def test_alternates_plain_and_bold(self):
        assert split_bold_segments("a *b* c *d*") == (
            Segment("a ", PLAIN), Segment("b", BOLD), Segment(" c ", PLAIN), Segment("d", BOLD),
        )

    def test_bold_state_does_not_carry_across_lines(self):
        lines = process_markup("*unterminated bold\nnext line")
        assert lines[0] == TextLine((Segment("unterminated bold", BOLD),))
        assert lines[1] == TextLine((Segment("next line", PLAIN),))

    def test_visible_text_strips_delimiters(self):
        (line,) = process_markup("Score: *10* of *20*")
        assert line.text == "Score: 10 of 20"


class TestQuestionScenario:
    def test_first_trigger_gets_no_divider(self):
        lines = process_markup("*QUESTIONS*\n*1.* What is 2+2?\nAnswer: 4")

        assert not any(isinstance(line, DividerLine) for line in lines)
        assert lines == [
            TextLine((Segment("QUESTIONS", BOLD),)),
            # The space after "*1.*" belongs to the plain part, as split on "*" gives it
            TextLine((Segment("1.", BOLD), Segment(" What is 2+2?", PLAIN))),
            TextLine((Segment("Answer: 4", PLAIN),)),
        ]


class TestDividers:
    def test_divider_before_later_trigger(self):
        lines = process_markup("Intro\n*SOLUTIONS*\n1. Four")
        assert lines == [
            TextLine((Segment("Intro", PLAIN),)),
            DividerLine(),
            TextLine((Segment("SOLUTIONS", BOLD),)),
            TextLine((Segment("1. Four", PLAIN),)),
        ]

    def test_one_divider_per_trigger_occurrence(self):
        content = "\n".join(["*QUESTIONS*", "q", "*SOLUTIONS*", "s", "  *TUTOR GUIDE* notes", "g"])
        lines = process_markup(content)

        dividers = [i for i, line in enumerate(lines) if isinstance(line, DividerLine)]
        assert len(dividers) == 2
        for i in dividers:
            assert lines[i + 1].text.strip().startswith(("SOLUTIONS", "TUTOR GUIDE"))

    def test_blank_first_line_counts_as_output(self):
        lines = process_markup("\n*QUESTIONS*")
        assert lines == [TextLine(), DividerLine(), TextLine((Segment("QUESTIONS", BOLD),))]

    def test_non_trigger_bold_line_has_no_divider(self):
        lines = process_markup("Intro\n*TRIAL QUESTIONS:*")
        assert DividerLine() not in lines

    def test_custom_predicate(self):
        processor = MarkupLineProcessor(is_divider_trigger=lambda line: line.startswith("#"))
        lines = processor.process("a\n# Part B")
        assert lines[1] == DividerLine()


class TestItemSeparator:
    def test_sentinel_becomes_single_separator(self):
        lines = process_markup(f"item A\n{ITEM_SEPARATOR}\nitem B")
        assert lines == [
            TextLine((Segment("item A", PLAIN),)),
            ItemSeparatorLine(),
            TextLine((Segment("item B", PLAIN),)),
        ]

    def test_sentinel_is_compared_trimmed(self):
        lines = process_markup(f"  {ITEM_SEPARATOR}  ")
        assert lines == [ItemSeparatorLine()]

    def test_shorter_dash_run_is_text(self):
        lines = process_markup("-" * 39)
        assert lines == [TextLine((Segment("-" * 39, PLAIN),))]


class TestCodeBlocks:
    def test_fenced_lines_are_verbatim_code(self):
        content = "before\n```\nx  =  *1*\n\n```\nafter"
        lines = process_markup(content)
        assert lines == [
            TextLine((Segment("before", PLAIN),)),
            TextLine((Segment("x  =  *1*", CODE),)),
            TextLine((Segment("", CODE),)),
            TextLine((Segment("after", PLAIN),)),
        ]

    def test_fence_with_language_tag_toggles(self):
        lines = process_markup("```python\nprint('hi')\n```")
        assert lines == [TextLine((Segment("print('hi')", CODE),))]

    def test_processor_resets_between_payloads(self):
        processor = MarkupLineProcessor()
        processor.process("```\nunclosed")
        assert processor.in_code_block

        lines = processor.process("plain")
        assert lines == [TextLine((Segment("plain", PLAIN),))]


class TestEdgeCases:
    def test_empty_content_yields_blank_line(self):
        assert process_markup("") == [TextLine()]

    def test_crlf_is_normalised(self):
        assert process_markup("a\r\nb") == process_markup("a\nb")

    def test_non_string_content_rejected(self):
        with pytest.raises(InvalidContentError):
            process_markup(None)
