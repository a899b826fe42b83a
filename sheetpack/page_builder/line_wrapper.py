"""Word-Wrap Engine

Greedy, word-level line breaking driven by real text measurement.

Words keep the style their segment had, so a bold run may continue on the
next output line. A word wider than the maximum width is placed on a line of
its own and allowed to overflow; it is never hyphenated or dropped.
"""
from typing import Iterable, List

from ..document import Line, Segment, TextLine
from ..exceptions import InvalidConfigurationError
from .text_measure import TextMeasurer, measure_text


def _merge_segments(words: List[Segment]) -> TextLine:
    """Join adjacent same-style words into single segments."""
    merged: List[Segment] = []
    for word in words:
        if merged and merged[-1].style is word.style:
            merged[-1] = Segment(merged[-1].text + word.text, word.style)
        else:
            merged.append(word)
    return TextLine(tuple(merged))


def _split_words(segment: Segment) -> List[Segment]:
    # Every word but the segment's last keeps its trailing space
    words = segment.text.split(" ")
    last = len(words) - 1
    pieces = [word if idx == last else word + " " for idx, word in enumerate(words)]
    return [Segment(piece, segment.style) for piece in pieces if piece]


def wrap_text_line(line: TextLine, max_width: float, measurer: TextMeasurer) -> List[TextLine]:
    """
    Wrap one text line to fit max_width.

    Args:
        line: Unwrapped text line from the markup processor
        max_width: Maximum content width in pixels
        measurer: Text measurement provider

    Returns:
        One or more text lines. Code lines are returned unchanged, and a line
        without words yields a single blank placeholder line.

    Raises:
        MeasurementError: If the measurement provider fails
    """
    if line.is_code:
        return [line]

    output: List[TextLine] = []
    current: List[Segment] = []
    current_width = 0.0

    for segment in line.segments:
        for word in _split_words(segment):
            word_width = measure_text(measurer, word.text, word.style)
            if current_width + word_width > max_width and current:
                output.append(_merge_segments(current))
                current = []
                current_width = 0.0
            current.append(word)
            current_width += word_width

    if current:
        output.append(_merge_segments(current))
    if not output:
        output.append(TextLine())
    return output


def wrap_lines(lines: Iterable[Line], max_width: float, measurer: TextMeasurer) -> List[Line]:
    """
    Wrap a processed line sequence.

    Dividers and item separators pass through unchanged.

    Args:
        lines: Output of the markup processor
        max_width: Maximum content width in pixels
        measurer: Text measurement provider

    Returns:
        Flat list of final lines
    """
    if max_width <= 0:
        raise InvalidConfigurationError(f"max_width must be positive, got {max_width}")

    wrapped: List[Line] = []
    for line in lines:
        if isinstance(line, TextLine):
            wrapped.extend(wrap_text_line(line, max_width, measurer))
        else:
            wrapped.append(line)
    return wrapped
