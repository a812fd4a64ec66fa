# -*- coding: utf-8 -*-
"""
src/textsnip/core/ocr_adapter.py

Runs one cropped region through the OCR engine.

Engines read from files, so each call writes the crop to a short-lived PNG
(the transient artifact), hands that path to the engine and removes the file
again before returning. Removal happens in a `finally` block and therefore on
success, on engine failure and on encoding failure alike.
"""

import logging
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Iterator, Optional

import cv2
import numpy as np

from .errors import OcrEngineError, TextSnipError
from .ocr_engine import OcrEngine
from .result import Result

logger = logging.getLogger(__name__)

ARTIFACT_PREFIX = "textsnip_"
ARTIFACT_SUFFIX = ".png"


@contextmanager
def transient_artifact(image: np.ndarray, directory: Optional[Path] = None) -> Iterator[Path]:
    """
    Writes `image` to a temporary PNG and yields its path.

    The file is deleted when the block exits, however it exits.

    Raises:
        OcrEngineError: If the temporary file cannot be created or the image
            cannot be encoded.
    """
    # delete=False so the file can be reopened by the engine on Windows;
    # cleanup is ours.
    try:
        with tempfile.NamedTemporaryFile(prefix=ARTIFACT_PREFIX, suffix=ARTIFACT_SUFFIX,
                                         dir=str(directory) if directory else None,
                                         delete=False) as f:
            path = Path(f.name)
    except OSError as e:
        raise OcrEngineError.from_exception(e, "Could not create the temporary image") from e

    try:
        try:
            written = cv2.imwrite(str(path), image)
        except cv2.error as e:
            raise OcrEngineError.from_exception(e, "Could not encode the selected region") from e
        if not written:
            raise OcrEngineError(message="Could not encode the selected region",
                                 details={"path": str(path)})
        logger.debug(f"Transient artifact written: {path}")
        yield path
    finally:
        if path.exists():
            path.unlink()
            logger.debug(f"Transient artifact removed: {path}")


class OcrPipelineAdapter:
    """
    Turns an image into recognized text.

    The engine is built by `engine_factory` on first use and reused after
    that. A factory failure is not remembered, so fixing the cause (for
    example installing the language data) works without a restart.
    """

    def __init__(self, engine_factory: Callable[[], OcrEngine], temp_dir: Optional[Path] = None):
        self._engine_factory = engine_factory
        self._engine: Optional[OcrEngine] = None
        self.temp_dir = temp_dir

    @property
    def engine(self) -> OcrEngine:
        if self._engine is None:
            self._engine = self._engine_factory()
        return self._engine

    def recognize(self, image: np.ndarray) -> Result[str]:
        """
        Recognizes the text in `image`.

        Returns:
            Result holding the recognized text, which may be empty, or the
            `OcrEngineError` that stopped recognition.
        """
        height, width = image.shape[:2]
        logger.info(f"Recognizing {width}x{height} region")
        try:
            with transient_artifact(image, self.temp_dir) as artifact:
                text = self.engine.read_file(artifact)
        except TextSnipError as e:
            logger.error(f"Recognition failed: {e}")
            return Result.fail(e)

        logger.info(f"Recognized {len(text)} characters")
        return Result.ok(text)
