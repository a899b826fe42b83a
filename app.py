"""Study Pack Builder - Main Application

Gradio application for previewing study packs as rendered pages and
downloading them as a PDF or as per-page PNG images.
"""
import logging
import os
import tempfile
from datetime import datetime

import gradio as gr
from dotenv import load_dotenv

# Load environment variables (SHEETPACK_FONT_DIR, LOG_LEVEL)
load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO"),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

from sheetpack import DocumentAssembler, DocumentMetadata, IncludedSections
from sheetpack.config import APP_MODES, BRAND_TITLE, EXAM_BOARDS
from sheetpack.exceptions import ExportError
from sheetpack.exporter import export_published_images, export_published_pdf

logger = logging.getLogger(__name__)

# One assembler per app: a newer build supersedes any build still running
assembler = DocumentAssembler()


def _export_dir() -> str:
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return tempfile.mkdtemp(prefix=f"sheetpack_{timestamp}_")


async def build_pack(
    content: str,
    title: str,
    board: str,
    year: str,
    subject: str,
    mode: str,
    include_trials: bool,
    include_solutions: bool,
    include_guide: bool,
    progress=gr.Progress()
) -> tuple:
    """
    Lay out and render the pack content.

    Args:
        content: Marked-up pack text (*bold*, ``` fences, separator lines)
        title: Header title
        board: Exam board
        year: Exam year
        subject: Subject name
        mode: Trial or exam mode
        include_trials / include_solutions / include_guide: Section flags
            used for export naming
        progress: Gradio progress tracker

    Returns:
        Tuple of (gallery images, status message)
    """
    metadata = DocumentMetadata(
        title=title or BRAND_TITLE,
        board=board or "",
        year=str(year or ""),
        subject=subject or "",
        mode=mode,
    )
    sections = IncludedSections(include_trials, include_solutions, include_guide)

    result = await assembler.generate(
        content or "", metadata, sections,
        progress_callback=lambda p, d: progress(p, desc=d),
    )
    if result.is_failed:
        # Previous pages stay on screen
        gr.Warning(result.status_message)
    return result.to_gradio_outputs()


def download_pdf():
    """Export the published pages as one PDF."""
    try:
        return export_published_pdf(assembler, _export_dir())
    except ExportError as e:
        raise gr.Error(f"Export failed: {str(e)}")


def download_images():
    """Export the published pages as individual PNG files."""
    try:
        return export_published_images(assembler, _export_dir())
    except ExportError as e:
        raise gr.Error(f"Export failed: {str(e)}")


# Create Gradio interface
with gr.Blocks(title="Study Pack Builder") as app:
    gr.Markdown("# 📚 Study Pack Builder")

    with gr.Row():
        with gr.Column():
            gr.Markdown("## Pack Details")

            title = gr.Textbox(label="Title", value=BRAND_TITLE)
            board = gr.Dropdown(choices=list(EXAM_BOARDS), value=EXAM_BOARDS[0], label="Exam Board")
            year = gr.Textbox(label="Year", value=str(datetime.now().year))
            subject = gr.Textbox(label="Subject", placeholder="e.g. Core Mathematics")
            mode = gr.Radio(choices=list(APP_MODES), value=APP_MODES[0], label="Mode")

            gr.Markdown("### Included Sections")
            include_trials = gr.Checkbox(label="Trials", value=True)
            include_solutions = gr.Checkbox(label="Solutions", value=True)
            include_guide = gr.Checkbox(label="Guide", value=True)

            content = gr.Textbox(
                label="Pack Content",
                lines=18,
                placeholder="*QUESTIONS*\n*1.* What is 2+2?\n...",
                info="Use *text* for bold, ``` lines for code blocks and a 40-dash line between items"
            )

            build_btn = gr.Button("🧾 Build Pack", variant="primary", size="lg")

        with gr.Column():
            gr.Markdown("## Preview")

            status = gr.Textbox(label="Status", interactive=False)
            gallery = gr.Gallery(label="Pages", columns=1, height="auto")

            with gr.Row():
                pdf_btn = gr.Button("Download PDF Pack", variant="stop")
                images_btn = gr.Button("Download PNG Images", variant="secondary")

            pdf_file = gr.File(label="📥 PDF Pack", type="filepath")
            image_files = gr.File(label="📥 Page Images", type="filepath", file_count="multiple")

    build_btn.click(
        fn=build_pack,
        inputs=[content, title, board, year, subject, mode,
                include_trials, include_solutions, include_guide],
        outputs=[gallery, status]
    )
    pdf_btn.click(fn=download_pdf, outputs=pdf_file)
    images_btn.click(fn=download_images, outputs=image_files)


if __name__ == "__main__":
    app.launch()
