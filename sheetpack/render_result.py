"""Generation Result Dataclass

Result of one document generation pass.
"""
from dataclasses import dataclass
from typing import Optional, Tuple

from .document import Document, RenderedPage


@dataclass
class GenerationResult:
    """Result from one run of the generation pipeline.

    Attributes:
        status: "completed", "stale" (superseded by a newer generation and
                discarded) or "failed"
        status_message: Human-readable status message
        generation_id: Token of the generation this result belongs to
        document: Paginated document (completed only)
        pages: Rendered pages in index order (completed only)
        error: Error message if generation failed (None otherwise)
    """

    status: str
    status_message: str
    generation_id: int
    document: Optional[Document] = None
    pages: Tuple[RenderedPage, ...] = ()
    error: Optional[str] = None

    @property
    def is_complete(self) -> bool:
        """True if the generation finished and its pages were published."""
        return self.status == "completed"

    @property
    def is_stale(self) -> bool:
        return self.status == "stale"

    @property
    def is_failed(self) -> bool:
        return self.status == "failed"

    def to_gradio_outputs(self) -> tuple:
        """Convert to Gradio UI outputs format.

        Stale and failed results leave the gallery untouched so the previous
        successful document stays on screen.

        Returns:
            Tuple of (gallery_images, status_message)
        """
        import gradio as gr

        if not self.is_complete:
            return gr.update(), self.status_message

        return [page.image for page in self.pages], self.status_message
