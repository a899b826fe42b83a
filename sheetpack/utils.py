"""Utilities Module

Helper functions for export naming.
"""
import re

from .config import DEFAULT_SUBJECT
from .document import IncludedSections


def clean_subject(subject: str) -> str:
    """
    Turn a subject string into a file-name token.

    Args:
        subject: Subject as displayed (e.g. "Core Mathematics")

    Returns:
        Trimmed subject with whitespace runs replaced by '-', or
        "General-Studies" when empty

    Examples:
        >>> clean_subject("  Core   Mathematics ")
        'Core-Mathematics'
        >>> clean_subject("")
        'General-Studies'
    """
    return re.sub(r'\s+', '-', (subject or '').strip()) or DEFAULT_SUBJECT


def export_basename(sections: IncludedSections, subject: str) -> str:
    """
    Build the base file name shared by the PDF and per-page image exports.

    Args:
        sections: Included sections; each contributes its label in the
                  stable order Trials, Solutions, Guide
        subject: Subject string

    Returns:
        "{labels joined by '-'}-{clean subject}"; the leading dash stays
        when no section is included

    Examples:
        >>> export_basename(IncludedSections(True, False, True), "Core Maths")
        'Trials-Guide-Core-Maths'
        >>> export_basename(IncludedSections(False, False, False), "Physics")
        '-Physics'
    """
    return f"{'-'.join(sections.labels())}-{clean_subject(subject)}"


def page_image_name(basename: str, page_number: int) -> str:
    """File stem for one page image; page_number is 1-based."""
    return f"{basename}-Page{page_number}"
