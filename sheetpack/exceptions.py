"""Custom Exception Hierarchy

Exception hierarchy for sheetpack providing granular exception types for the
different stages of turning marked-up text into rendered, exported pages.
"""


class SheetPackError(Exception):
    """Base exception for all sheetpack errors.

    This is the root of the exception hierarchy. Catching this exception
    will catch all custom exceptions raised by the engine.
    """
    pass


# Validation Errors
class ValidationError(SheetPackError):
    """Raised when input validation fails."""
    pass


class InvalidConfigurationError(ValidationError):
    """Raised when layout or configuration parameters are invalid."""
    pass


class InvalidContentError(ValidationError):
    """Raised when the content payload is not text."""
    pass


# Rendering Errors
class RenderingError(SheetPackError):
    """Base class for layout and rasterization errors."""
    pass


class FontError(RenderingError):
    """Raised when a font cannot be loaded."""
    pass


class SurfaceCreationError(RenderingError):
    """Raised when a fresh page surface cannot be created."""

    def __init__(self, size: tuple, reason: str):
        self.size = size
        super().__init__(f"Failed to create {size[0]}x{size[1]} page surface: {reason}")


class MeasurementError(RenderingError):
    """Raised when the text measurement provider fails."""

    def __init__(self, text: str, reason: str):
        self.text = text
        preview = text if len(text) <= 40 else text[:40] + "..."
        super().__init__(f"Failed to measure '{preview}': {reason}")


# Generation Errors
class GenerationError(SheetPackError):
    """Raised when a step of document generation fails.

    This wraps the underlying exception while preserving which step failed.
    """

    def __init__(self, step_name: str, original_exception: Exception):
        self.step_name = step_name
        self.original_exception = original_exception
        super().__init__(
            f"Generation step '{step_name}' failed: {str(original_exception)}"
        )


# Export Errors
class ExportError(SheetPackError):
    """Base class for export errors."""
    pass


class EmptyExportError(ExportError):
    """Raised when an export is requested for an empty page sequence."""

    def __init__(self):
        super().__init__("Nothing to export: no rendered pages are available")
