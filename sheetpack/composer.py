"""Pack Composer Module

Builds the single marked-up text payload the engine lays out from one or
more library items, honouring the included-sections flags. Consecutive
items are separated by the item separator sentinel so each starts after a
"NEXT ITEM IN PACK" rule.
"""
from dataclasses import dataclass
from typing import Sequence

from .config import ITEM_SEPARATOR
from .document import IncludedSections

# Section header lines. They are plain bold labels, not divider triggers.
SECTION_HEADERS = {
    "trials": "*TRIAL QUESTIONS:*",
    "solutions": "*OFFICIAL SOLUTIONS:*",
    "guide": "*TUTOR GUIDE:*",
}


@dataclass(frozen=True)
class PackItem:
    """One processed paper from the library.

    Attributes:
        subject: Subject name
        board: Exam board
        year: Exam year
        test: Trial questions text
        answers: Official solutions text
        tutor_guide: Tutor guide text
        tutor_signature: Closing signature, always written wrapped in '_'
    """

    subject: str
    board: str = ""
    year: str = ""
    test: str = ""
    answers: str = ""
    tutor_guide: str = ""
    tutor_signature: str = ""


def compose_item(item: PackItem, sections: IncludedSections) -> str:
    """
    Compose one item's content.

    Args:
        item: Library item
        sections: Which sections to include

    Returns:
        Marked-up text: a bold title line and a blank line, then each
        included section's header, body and a blank line, then the
        signature as "_{signature}_"
    """
    content = f"*{item.board} {item.year} - {item.subject}*\n\n"
    for name, included, body in (
        ("trials", sections.trials, item.test),
        ("solutions", sections.solutions, item.answers),
        ("guide", sections.guide, item.tutor_guide),
    ):
        if included:
            content += f"{SECTION_HEADERS[name]}\n{body or ''}\n\n"
    return content + f"_{item.tutor_signature or ''}_"


def compose_pack(items: Sequence[PackItem], sections: IncludedSections,
                 separator: str = ITEM_SEPARATOR) -> str:
    """
    Compose several items into one payload.

    Every item but the last is followed by the separator on its own line,
    then items are joined by newlines, so a blank line follows each separator.

    Examples:
        >>> a = PackItem("Physics", "WASSCE", "2024", tutor_signature="Mr. A")
        >>> b = PackItem("Biology", "WASSCE", "2024", tutor_signature="Mr. B")
        >>> compose_pack([a, b], IncludedSections(False, False, False)).split("\\n")
        ['*WASSCE 2024 - Physics*', '', '_Mr. A_', '----------------------------------------', '', '*WASSCE 2024 - Biology*', '', '_Mr. B_']
    """
    texts = [compose_item(item, sections) for item in items]
    for i in range(len(texts) - 1):
        texts[i] += f"\n{separator}\n"
    return "\n".join(texts)
