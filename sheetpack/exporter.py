"""Exporter Module

Turns a published page-image sequence into downloadable artifacts:
- one multi-page PDF whose page size equals the rendered pixel size
- one PNG per page

Both exports refuse an empty sequence and never modify the page images.
"""
import logging
import os
from typing import List, Optional, Sequence

from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas as pdfcanvas

from .document import IncludedSections, RenderedPage
from .exceptions import EmptyExportError, ExportError
from .utils import export_basename, page_image_name

logger = logging.getLogger(__name__)


def _ordered_pages(pages: Sequence[RenderedPage]) -> List[RenderedPage]:
    """
    Validate and sort pages for export.

    Raises:
        EmptyExportError: If there are no pages
        ExportError: If pages come from different generations or repeat an index
    """
    if not pages:
        raise EmptyExportError()

    keys = sorted(page.key for page in pages)
    generations = sorted({generation_id for generation_id, _ in keys})
    if len(generations) > 1:
        raise ExportError(
            f"Pages from different generations cannot be exported together: {generations}"
        )
    if len(set(keys)) != len(keys):
        raise ExportError(f"Duplicate page indices in export: {[index for _, index in keys]}")

    return sorted(pages, key=lambda page: page.key)


def export_pdf(
    pages: Sequence[RenderedPage],
    sections: IncludedSections,
    subject: str,
    output_dir: str,
    basename: Optional[str] = None,
) -> str:
    """
    Assemble all page images into one PDF.

    Each PDF page is exactly the rendered image size (1 pixel = 1 point) and
    the image is drawn full-bleed. Output is byte-stable for identical pages.

    Args:
        pages: Rendered pages of one generation
        sections: Included sections (naming)
        subject: Subject string (naming)
        output_dir: Directory to write into (created if missing)
        basename: Optional override for the derived base name

    Returns:
        Path to the written PDF

    Raises:
        EmptyExportError: If pages is empty
        ExportError: If pages are inconsistent or the PDF cannot be written
    """
    ordered = _ordered_pages(pages)
    basename = basename or export_basename(sections, subject)
    os.makedirs(output_dir, exist_ok=True)
    output_path = os.path.join(output_dir, f"{basename}.pdf")

    try:
        pdf = pdfcanvas.Canvas(output_path, pagesize=ordered[0].size, invariant=1)
        pdf.setTitle(basename)
        for page in ordered:
            width, height = page.size
            pdf.setPageSize((width, height))
            pdf.drawImage(ImageReader(page.image), 0, 0, width=width, height=height)
            pdf.showPage()
        pdf.save()
    except OSError as e:
        raise ExportError(f"Could not write PDF to {output_path}: {e}") from e

    logger.info("Exported %d page(s) to %s", len(ordered), output_path)
    return output_path


def export_images(
    pages: Sequence[RenderedPage],
    sections: IncludedSections,
    subject: str,
    output_dir: str,
    basename: Optional[str] = None,
) -> List[str]:
    """
    Write every page as a standalone PNG named "{base}-Page{i}.png".

    Args:
        pages: Rendered pages of one generation
        sections: Included sections (naming)
        subject: Subject string (naming)
        output_dir: Directory to write into (created if missing)
        basename: Optional override for the derived base name

    Returns:
        Paths of the written images in page order

    Raises:
        EmptyExportError: If pages is empty
        ExportError: If pages are inconsistent or an image cannot be written
    """
    ordered = _ordered_pages(pages)
    basename = basename or export_basename(sections, subject)
    os.makedirs(output_dir, exist_ok=True)

    paths = []
    for page in ordered:
        path = os.path.join(output_dir, f"{page_image_name(basename, page.index + 1)}.png")
        try:
            with open(path, "wb") as f:
                f.write(page.to_png_bytes())
        except OSError as e:
            raise ExportError(f"Could not write page image {path}: {e}") from e
        paths.append(path)

    logger.info("Exported %d page image(s) to %s", len(paths), output_dir)
    return paths


def export_published_pdf(assembler, output_dir: str) -> str:
    """
    Export the assembler's published generation as a PDF.

    Raises:
        EmptyExportError: If nothing has been published yet
    """
    published = assembler.published
    if published is None:
        raise EmptyExportError()
    return export_pdf(published.pages, published.sections, published.metadata.subject, output_dir)


def export_published_images(assembler, output_dir: str) -> List[str]:
    """
    Export the assembler's published generation as per-page PNGs.

    Raises:
        EmptyExportError: If nothing has been published yet
    """
    published = assembler.published
    if published is None:
        raise EmptyExportError()
    return export_images(published.pages, published.sections, published.metadata.subject, output_dir)
