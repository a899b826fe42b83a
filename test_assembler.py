"""Tests for the document assembler: generation tokens, publishing and failures."""
import asyncio

import pytest

from sheetpack import DocumentAssembler, DocumentMetadata, IncludedSections, render_document
from sheetpack.exceptions import EmptyExportError
from sheetpack.exporter import export_published_pdf
from sheetpack.page_builder import FixedWidthMeasurer, FontManager, PageRenderer

METADATA = DocumentMetadata(board="WASSCE", year="2024", subject="Biology")
LONG_CONTENT = "\n".join(f"*{i}.* Describe the structure of the cell membrane." for i in range(80))
SHORT_CONTENT = "*QUESTIONS*\n*1.* What is 2+2?\nAnswer: 4"


@pytest.fixture(scope="module")
def font_manager():
    return FontManager()


@pytest.fixture
def assembler(font_manager):
    return DocumentAssembler(font_manager=font_manager, measurer=FixedWidthMeasurer(char_width=10))


class TestGenerate:
    def test_publishes_pages_in_order(self, assembler):
        result = assembler.generate_sync(LONG_CONTENT, METADATA)

        assert result.is_complete
        assert result.generation_id == 1
        assert len(result.pages) == result.document.total_pages == 3
        assert [page.index for page in result.pages] == [0, 1, 2]
        assert all(page.generation_id == 1 for page in result.pages)
        assert assembler.published_pages == result.pages
        assert not assembler.is_generating

    def test_empty_content_yields_one_page(self, assembler):
        result = assembler.generate_sync("", METADATA)
        assert result.is_complete
        assert len(result.pages) == 1

    def test_progress_reaches_completion(self, font_manager):
        updates = []
        assembler = DocumentAssembler(font_manager=font_manager, measurer=FixedWidthMeasurer(),
                                      progress_callback=lambda p, d: updates.append(p))
        assembler.generate_sync(SHORT_CONTENT, METADATA)
        assert updates[0] == 0.0
        assert updates[-1] == 1.0

    def test_identical_inputs_give_identical_pages(self, assembler):
        first = assembler.generate_sync(SHORT_CONTENT, METADATA)
        second = assembler.generate_sync(SHORT_CONTENT, METADATA)

        assert second.generation_id == first.generation_id + 1
        assert [p.image.tobytes() for p in first.pages] == [p.image.tobytes() for p in second.pages]

    def test_render_document_matches_assembler(self, assembler, font_manager):
        renderer = PageRenderer(font_manager=font_manager, measurer=FixedWidthMeasurer(char_width=10))
        pages = render_document(SHORT_CONTENT, METADATA, renderer)
        result = assembler.generate_sync(SHORT_CONTENT, METADATA)
        assert [p.image.tobytes() for p in pages] == [p.image.tobytes() for p in result.pages]


class TestStaleGenerations:
    def test_superseded_generation_is_dropped(self, assembler):
        async def run_both():
            return await asyncio.gather(
                assembler.generate(LONG_CONTENT, METADATA),
                assembler.generate(SHORT_CONTENT, METADATA),
            )

        old, new = asyncio.run(run_both())

        assert old.is_stale
        assert old.pages == ()
        assert new.is_complete
        assert assembler.published.generation_id == new.generation_id == 2
        assert assembler.published_pages == new.pages
        assert not assembler.is_generating

    def test_progress_goes_to_the_requesting_call(self, assembler):
        older, newer = [], []

        async def run_both():
            return await asyncio.gather(
                assembler.generate(LONG_CONTENT, METADATA, progress_callback=lambda p, d: older.append(p)),
                assembler.generate(SHORT_CONTENT, METADATA, progress_callback=lambda p, d: newer.append(p)),
            )

        asyncio.run(run_both())

        assert newer == [0.0, 1.0]
        assert older[0] == 0.0
        assert all(0.0 <= p <= 1.0 for p in older)


class TestFailures:
    def test_surface_failure_keeps_previous_pages(self, assembler):
        good = assembler.generate_sync(SHORT_CONTENT, METADATA)

        def broken_factory(size, background):
            raise MemoryError("no surface")

        assembler.renderer.surface_factory = broken_factory
        failed = assembler.generate_sync(LONG_CONTENT, METADATA)

        assert failed.is_failed
        assert "surface" in failed.error
        assert failed.pages == ()
        assert assembler.published.generation_id == good.generation_id
        assert assembler.published_pages == good.pages
        assert not assembler.is_generating

    def test_measurement_failure_publishes_nothing(self, font_manager):
        class BrokenMeasurer:
            def measure(self, text, style):
                raise RuntimeError("measure failed")

        assembler = DocumentAssembler(font_manager=font_manager, measurer=BrokenMeasurer())
        result = assembler.generate_sync(SHORT_CONTENT, METADATA)

        assert result.is_failed
        assert "layout" in result.error
        assert assembler.published is None

    def test_timeout_fails_generation(self, assembler):
        result = assembler.generate_sync(LONG_CONTENT, METADATA, timeout=0)
        assert result.is_failed
        assert "exceeded" in result.error
        assert assembler.published is None

    def test_export_refused_without_published_pages(self, assembler, tmp_path):
        with pytest.raises(EmptyExportError):
            export_published_pdf(assembler, str(tmp_path))

    def test_sections_are_kept_with_published_pages(self, assembler):
        sections = IncludedSections(trials=True, solutions=False, guide=False)
        assembler.generate_sync(SHORT_CONTENT, METADATA, sections)
        assert assembler.published.sections == sections
        assert assembler.published.metadata == METADATA

    def test_cancelled_generation_clears_busy_flag(self, assembler):
        async def cancel_midway():
            task = asyncio.ensure_future(assembler.generate(LONG_CONTENT, METADATA))
            # Let the task render its first page before cancelling
            await asyncio.sleep(0)
            assert assembler.is_generating
            task.cancel()
            with pytest.raises(asyncio.CancelledError):
                await task

        asyncio.run(cancel_midway())

        assert not assembler.is_generating
        assert assembler.published is None
