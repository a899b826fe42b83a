"""Markup Line Processor Module

Turns lightly marked-up text into a flat sequence of typed lines:
- ``*text*`` spans become bold segments (alternation restarts on every line)
- lines starting with three backticks toggle a code block
- a line equal to the item separator sentinel becomes an ItemSeparatorLine
- a DividerLine is inserted before section-header lines, except before the
  very first output line

Lines are not wrapped here; see line_wrapper.
"""
from typing import Callable, Iterable, List, Optional, Tuple

from ..config import BOLD_DELIMITER, CODE_FENCE, DIVIDER_TRIGGERS, ITEM_SEPARATOR
from ..document import DividerLine, ItemSeparatorLine, Line, Segment, SegmentStyle, TextLine
from ..exceptions import InvalidContentError


def split_bold_segments(line: str) -> Tuple[Segment, ...]:
    """
    Split one raw line into plain/bold segments on the bold delimiter.

    Parts at even positions are plain, odd positions bold. Empty parts carry
    no visible text and are dropped.

    Examples:
        >>> split_bold_segments("*1.* What is 2+2?")
        (Segment(text='1.', style=<SegmentStyle.BOLD: 'bold'>), Segment(text=' What is 2+2?', style=<SegmentStyle.PLAIN: 'plain'>))
    """
    parts = line.split(BOLD_DELIMITER)
    return tuple(
        Segment(part, SegmentStyle.BOLD if idx % 2 == 1 else SegmentStyle.PLAIN)
        for idx, part in enumerate(parts)
        if part
    )


def starts_with_trigger(line: str, triggers: Iterable[str] = DIVIDER_TRIGGERS) -> bool:
    """True if the trimmed line begins with one of the section-header triggers."""
    stripped = line.strip()
    return any(stripped.startswith(trigger) for trigger in triggers)


class MarkupLineProcessor:
    """Line-by-line markup processor.

    The only state carried between raw lines is whether a code block is open.

    Attributes:
        separator: Sentinel line that marks a boundary between pack items
        in_code_block: True while between two code fences
    """

    def __init__(
        self,
        divider_triggers: Iterable[str] = DIVIDER_TRIGGERS,
        separator: str = ITEM_SEPARATOR,
        is_divider_trigger: Optional[Callable[[str], bool]] = None,
    ):
        """
        Initialize the processor.

        Args:
            divider_triggers: Prefixes that mark a major section header
            separator: Item separator sentinel (compared against the trimmed line)
            is_divider_trigger: Optional predicate replacing the prefix check
        """
        self.divider_triggers = tuple(divider_triggers)
        self.separator = separator
        self._is_divider_trigger = is_divider_trigger or (
            lambda line: starts_with_trigger(line, self.divider_triggers)
        )
        self.in_code_block = False

    def process(self, content: str) -> List[Line]:
        """
        Process a whole content payload.

        Args:
            content: Newline-delimited marked-up text

        Returns:
            Ordered list of TextLine / DividerLine / ItemSeparatorLine

        Raises:
            InvalidContentError: If content is not a string
        """
        if not isinstance(content, str):
            raise InvalidContentError(
                f"Content must be a string, got {type(content).__name__}"
            )

        self.in_code_block = False
        output: List[Line] = []
        for raw_line in content.split("\n"):
            self._process_line(raw_line.rstrip("\r"), output)
        return output

    def _process_line(self, line: str, output: List[Line]):
        if line.startswith(CODE_FENCE):
            self.in_code_block = not self.in_code_block
            return

        if line.strip() == self.separator:
            output.append(ItemSeparatorLine())
            return

        if output and self._is_divider_trigger(line):
            output.append(DividerLine())

        if self.in_code_block:
            output.append(TextLine((Segment(line, SegmentStyle.CODE),)))
        else:
            output.append(TextLine(split_bold_segments(line)))


def process_markup(
    content: str,
    divider_triggers: Iterable[str] = DIVIDER_TRIGGERS,
    separator: str = ITEM_SEPARATOR,
) -> List[Line]:
    """Convenience wrapper around MarkupLineProcessor.process()."""
    return MarkupLineProcessor(divider_triggers=divider_triggers, separator=separator).process(content)
