# -*- coding: utf-8 -*-
"""
src/textsnip/core/errors.py

Error types used across the capture pipeline.

Errors are ordinary exceptions so they can be raised inside engine wrappers,
but the pipeline itself passes them around as values inside a `Result`
(see `result.py`) and only the orchestrator decides how to surface them.
"""

from typing import Any, Dict, Optional


class TextSnipError(Exception):
    """Base class for all TextSnip errors."""

    title = "Error"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None,
                 inner_error: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.inner_error = inner_error

    @classmethod
    def from_exception(cls, ex: BaseException, prefix: str = "") -> "TextSnipError":
        """Wraps an arbitrary exception, keeping it as `inner_error`."""
        message = f"{prefix}: {ex}" if prefix else str(ex)
        return cls(message=message, inner_error=ex)

    def __str__(self) -> str:
        return self.message


class OcrEngineError(TextSnipError):
    """The OCR engine could not be initialized or could not process an image."""

    title = "OCR Error"


class CaptureError(TextSnipError):
    """The primary display could not be grabbed."""

    title = "Capture Error"


class ConfigurationError(TextSnipError):
    """The configuration names something that does not exist."""

    title = "Configuration Error"
