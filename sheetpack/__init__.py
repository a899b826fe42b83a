"""SheetPack

Pagination and rendering engine for tutoring study packs: lays out lightly
marked-up text into fixed-size decorated page images and exports them as a
multi-page PDF or as standalone PNGs.
"""

__version__ = "1.0.0"

from .document import (
    Segment,
    SegmentStyle,
    TextLine,
    DividerLine,
    ItemSeparatorLine,
    Line,
    Page,
    Document,
    DocumentMetadata,
    IncludedSections,
    RenderedPage,
)
from .render_options import PageLayout
from .render_result import GenerationResult
from .assembler import DocumentAssembler, PublishedDocument, build_document, render_document
from .exporter import export_pdf, export_images, export_published_pdf, export_published_images
from .composer import PackItem, compose_item, compose_pack
from .utils import export_basename, clean_subject

__all__ = [
    # Model
    'Segment',
    'SegmentStyle',
    'TextLine',
    'DividerLine',
    'ItemSeparatorLine',
    'Line',
    'Page',
    'Document',
    'DocumentMetadata',
    'IncludedSections',
    'RenderedPage',

    # Options and results
    'PageLayout',
    'GenerationResult',

    # Generation
    'DocumentAssembler',
    'PublishedDocument',
    'build_document',
    'render_document',

    # Export
    'export_pdf',
    'export_images',
    'export_published_pdf',
    'export_published_images',
    'export_basename',
    'clean_subject',

    # Pack composition
    'PackItem',
    'compose_item',
    'compose_pack',
]
