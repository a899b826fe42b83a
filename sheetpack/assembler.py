"""Document Assembler

Orchestrates one generation: markup -> word wrap -> pagination -> page
rendering, and owns the "current generation" token.

Every triggering change starts a new generation with a fresh token. Pages are
rendered strictly in index order, yielding to the event loop between pages.
Results are published only if the token is still current when rendering
finishes; otherwise they are dropped. Publishing replaces the whole page set
in a single assignment, so readers see either the old set or the new one.
"""
import asyncio
import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from .document import Document, DocumentMetadata, IncludedSections, RenderedPage
from .exceptions import GenerationError
from .page_builder import (
    FontManager,
    FontMeasurer,
    MarkupLineProcessor,
    PageRenderer,
    TextMeasurer,
    paginate,
    wrap_lines,
)
from .page_builder.page_renderer import SurfaceFactory
from .render_options import PageLayout
from .render_result import GenerationResult

logger = logging.getLogger(__name__)


def build_document(
    content: str,
    metadata: DocumentMetadata,
    layout: PageLayout,
    measurer: TextMeasurer,
    processor: Optional[MarkupLineProcessor] = None,
    generation_id: int = 0,
) -> Document:
    """
    Lay out content into pages without rendering them.

    Args:
        content: Marked-up text payload
        metadata: Display metadata
        layout: Page geometry
        measurer: Text measurement provider
        processor: Optional preconfigured markup processor
        generation_id: Token stamped on the document

    Returns:
        Document with at least one page
    """
    lines = (processor or MarkupLineProcessor()).process(content)
    wrapped = wrap_lines(lines, layout.content_width, measurer)
    pages = paginate(wrapped, layout)
    return Document(
        title=metadata.title,
        subtitle_parts=(metadata.board, metadata.year, metadata.subject),
        pages=tuple(pages),
        generation_id=generation_id,
    )


def render_document(
    content: str,
    metadata: DocumentMetadata,
    renderer: Optional[PageRenderer] = None,
    generation_id: int = 0,
) -> List[RenderedPage]:
    """
    Lay out and render content synchronously.

    Identical inputs give pixel-identical pages.

    Args:
        content: Marked-up text payload
        metadata: Display metadata
        renderer: Page renderer (its layout and measurer drive the layout too)
        generation_id: Token stamped on the rendered pages

    Returns:
        Rendered pages in index order
    """
    renderer = renderer or PageRenderer()
    document = build_document(content, metadata, renderer.layout, renderer.measurer,
                              generation_id=generation_id)
    return [
        RenderedPage(generation_id, page.index, renderer.render(page, document.total_pages, metadata))
        for page in document.pages
    ]


@dataclass(frozen=True)
class PublishedDocument:
    """The complete output of the most recent successful generation."""

    generation_id: int
    document: Document
    pages: Tuple[RenderedPage, ...]
    metadata: DocumentMetadata
    sections: IncludedSections


class DocumentAssembler:
    """Runs generations and publishes their pages.

    Attributes:
        generation_id: Token of the most recently started generation
        is_generating: True while the current generation is running
        published: Output of the last successful, non-stale generation
    """

    def __init__(
        self,
        layout: Optional[PageLayout] = None,
        font_manager: Optional[FontManager] = None,
        measurer: Optional[TextMeasurer] = None,
        surface_factory: Optional[SurfaceFactory] = None,
        processor: Optional[MarkupLineProcessor] = None,
        progress_callback: Optional[Callable[[float, str], None]] = None,
    ):
        """Initialize the assembler.

        Args:
            layout: Page geometry (defaults from config)
            font_manager: Font source; created on demand when omitted
            measurer: Text measurement provider; defaults to font measurement
            surface_factory: Optional factory for fresh page surfaces
            processor: Optional preconfigured markup processor
            progress_callback: Optional function(progress: float, desc: str)
        """
        self.layout = layout or PageLayout()
        self.renderer = PageRenderer(
            layout=self.layout,
            font_manager=font_manager,
            measurer=measurer,
            surface_factory=surface_factory,
        )
        self.processor = processor or MarkupLineProcessor()
        self.progress = progress_callback or (lambda p, d: None)

        self.generation_id = 0
        self.is_generating = False
        self.published: Optional[PublishedDocument] = None

    @property
    def measurer(self) -> TextMeasurer:
        return self.renderer.measurer

    @property
    def published_pages(self) -> Tuple[RenderedPage, ...]:
        return self.published.pages if self.published else ()

    def is_current(self, generation_id: int) -> bool:
        return generation_id == self.generation_id

    async def generate(
        self,
        content: str,
        metadata: DocumentMetadata,
        sections: Optional[IncludedSections] = None,
        timeout: Optional[float] = None,
        progress_callback: Optional[Callable[[float, str], None]] = None,
    ) -> GenerationResult:
        """Run a new generation for a content + metadata snapshot.

        Args:
            content: Marked-up text payload
            metadata: Display metadata
            sections: Included sections (export naming only)
            timeout: Optional limit in seconds; exceeding it fails the generation
            progress_callback: Progress sink for this generation only;
                defaults to the assembler-wide callback

        Returns:
            GenerationResult; "stale" when a newer generation started meanwhile

        Raises:
            asyncio.CancelledError: If the host cancels the task; other
                failures are captured in GenerationResult.error
        """
        self.generation_id += 1
        token = self.generation_id
        sections = sections or IncludedSections()
        progress = progress_callback or self.progress
        self.is_generating = True
        logger.debug("Starting generation %d (%d chars)", token, len(content) if isinstance(content, str) else 0)

        try:
            try:
                work = self._run(token, content, metadata, progress)
                if timeout is not None:
                    document, pages = await asyncio.wait_for(work, timeout)
                else:
                    document, pages = await work
            except asyncio.TimeoutError:
                return self._fail(token, GenerationError(
                    "render", TimeoutError(f"generation exceeded {timeout} seconds")))
            except Exception as e:
                return self._fail(token, e)

            if not self.is_current(token):
                logger.debug("Dropping stale generation %d (current is %d)", token, self.generation_id)
                return GenerationResult("stale", "Superseded by a newer generation", token)

            self.published = PublishedDocument(token, document, pages, metadata, sections)
            logger.info("Published generation %d with %d page(s)", token, len(pages))
            return GenerationResult(
                status="completed",
                status_message=f"Built {len(pages)} page(s)",
                generation_id=token,
                document=document,
                pages=pages,
            )
        finally:
            # A newer generation owns the flag once this one is stale
            if self.is_current(token):
                self.is_generating = False

    def _fail(self, token: int, error: Exception) -> GenerationResult:
        """Convert a generation failure into a single terminal result.

        The previously published document is left untouched.
        """
        if not self.is_current(token):
            logger.debug("Generation %d failed after being superseded: %s", token, error)
            return GenerationResult("stale", "Superseded by a newer generation", token)

        logger.warning("Generation %d failed: %s", token, error)
        return GenerationResult(
            status="failed",
            status_message=f"Generation failed: {str(error)}",
            generation_id=token,
            error=str(error),
        )

    def generate_sync(self, content: str, metadata: DocumentMetadata,
                      sections: Optional[IncludedSections] = None,
                      timeout: Optional[float] = None,
                      progress_callback: Optional[Callable[[float, str], None]] = None) -> GenerationResult:
        """Blocking wrapper around generate() for scripts."""
        return asyncio.run(self.generate(content, metadata, sections, timeout, progress_callback))

    async def _run(self, token: int, content: str, metadata: DocumentMetadata,
                   progress: Callable[[float, str], None]) -> Tuple[Document, Tuple[RenderedPage, ...]]:
        progress(0.0, "Laying out content...")
        try:
            document = build_document(content, metadata, self.layout, self.measurer,
                                      processor=self.processor, generation_id=token)
        except Exception as e:
            raise GenerationError("layout", e) from e

        total = document.total_pages
        logger.debug("Generation %d: %d line(s) over %d page(s)", token, len(document.lines), total)

        rendered: List[RenderedPage] = []
        for page in document.pages:
            try:
                image = self.renderer.render(page, total, metadata)
            except Exception as e:
                raise GenerationError("render", e) from e
            rendered.append(RenderedPage(token, page.index, image))
            progress(len(rendered) / total, f"Rendered page {page.number} of {total}")
            # Let the host event loop breathe between pages
            await asyncio.sleep(0)

        return document, tuple(rendered)
