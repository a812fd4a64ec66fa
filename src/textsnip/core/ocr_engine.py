# -*- coding: utf-8 -*-
"""
src/textsnip/core/ocr_engine.py

Thin wrappers around the OCR engines TextSnip can drive.

Each engine reads an image file and returns the recognized text. Engines are
configured with exactly one language and the engine's default recognition
mode. Anything that goes wrong, while loading models or while reading an
image, is re-raised as `OcrEngineError` carrying the engine's own message.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

import easyocr
import pytesseract

from .errors import ConfigurationError, OcrEngineError

logger = logging.getLogger(__name__)

ENGINE_EASYOCR = "easyocr"
ENGINE_TESSERACT = "tesseract"


class OcrEngine(ABC):
    """An initialized OCR engine bound to one language."""

    @abstractmethod
    def read_file(self, image_path: Path) -> str:
        """
        Recognizes the text in the image stored at `image_path`.

        Raises:
            OcrEngineError: If the engine cannot process the image.
        """


class EasyOcrEngine(OcrEngine):
    """
    EasyOCR backed engine.

    Loading the detection and recognition models takes a few seconds, so the
    instance is meant to be created once and reused for every capture.
    """

    def __init__(self, language: str = "en", model_dir: Optional[Path] = None,
                 gpu: bool = False, download_enabled: bool = True):
        """
        Args:
            language (str): The single EasyOCR language code to recognize.
            model_dir (Path, optional): Where the model files live. When
                downloads are disabled the models must already be there.
            gpu (bool): Use CUDA if available. Off by default since most
                desktops running this have no configured GPU.
            download_enabled (bool): Let EasyOCR fetch missing models.
        """
        self.language = language
        logger.info(f"Initializing EasyOCR Reader for language '{language}'... (This may take a moment)")
        try:
            if model_dir is not None:
                Path(model_dir).mkdir(parents=True, exist_ok=True)
            self.reader = easyocr.Reader(
                [language],
                gpu=gpu,
                model_storage_directory=str(model_dir) if model_dir is not None else None,
                download_enabled=download_enabled,
                verbose=False,
            )
        except Exception as e:
            logger.critical(f"Failed to initialize EasyOCR Reader: {e}")
            raise OcrEngineError.from_exception(e, "Failed to initialize EasyOCR") from e
        logger.info("EasyOCR Reader initialized successfully.")

    def read_file(self, image_path: Path) -> str:
        try:
            # detail=0 returns plain strings; paragraph=True merges boxes into
            # reading-order blocks so line structure survives.
            lines = self.reader.readtext(str(image_path), detail=0, paragraph=True)
        except Exception as e:
            raise OcrEngineError.from_exception(e, "EasyOCR could not process the image") from e
        return "\n".join(lines)


class TesseractEngine(OcrEngine):
    """Tesseract engine driven through pytesseract."""

    def __init__(self, language: str = "eng", tessdata_dir: Optional[Path] = None,
                 tesseract_cmd: Optional[str] = None):
        """
        Args:
            language (str): The Tesseract language code, e.g. 'eng'.
            tessdata_dir (Path, optional): Directory holding
                '<language>.traineddata'. Tesseract's own default is used
                when omitted.
            tesseract_cmd (str, optional): Path to the tesseract binary if it
                is not on PATH.
        """
        self.language = language
        self.tessdata_dir = Path(tessdata_dir) if tessdata_dir else None

        if tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = tesseract_cmd
            logger.info(f"Configured Tesseract path: {tesseract_cmd}")

        try:
            version = pytesseract.get_tesseract_version()
        except pytesseract.TesseractNotFoundError as e:
            raise OcrEngineError.from_exception(e, "Tesseract OCR executable not found") from e

        if self.tessdata_dir is not None:
            traineddata = self.tessdata_dir / f"{language}.traineddata"
            if not traineddata.is_file():
                raise OcrEngineError(
                    message=f"Missing language data: {traineddata}",
                    details={"tessdata_dir": str(self.tessdata_dir), "language": language},
                )
        logger.info(f"Tesseract {version} ready for language '{language}'")

    @property
    def tesseract_config(self) -> str:
        # --oem 3 is Tesseract's default engine mode.
        config = "--oem 3"
        if self.tessdata_dir is not None:
            config = f'--tessdata-dir "{self.tessdata_dir}" {config}'
        return config

    def read_file(self, image_path: Path) -> str:
        try:
            return pytesseract.image_to_string(str(image_path), lang=self.language,
                                               config=self.tesseract_config)
        except (pytesseract.TesseractError, pytesseract.TesseractNotFoundError, OSError, RuntimeError) as e:
            raise OcrEngineError.from_exception(e, "Tesseract could not process the image") from e


def create_engine(config) -> OcrEngine:
    """
    Builds the engine selected by `config.ocr_engine`.

    Raises:
        ConfigurationError: If the engine name is unknown.
        OcrEngineError: If the engine fails to initialize.
    """
    name = config.ocr_engine
    if name == ENGINE_EASYOCR:
        return EasyOcrEngine(
            language=config.easyocr_language,
            model_dir=config.easyocr_model_dir,
            gpu=config.easyocr_gpu,
            download_enabled=config.easyocr_download_enabled,
        )
    if name == ENGINE_TESSERACT:
        return TesseractEngine(
            language=config.tesseract_language,
            tessdata_dir=config.tesseract_tessdata_dir,
            tesseract_cmd=config.tesseract_cmd,
        )
    raise ConfigurationError(
        message=f"Unknown OCR engine '{name}'. Expected '{ENGINE_EASYOCR}' or '{ENGINE_TESSERACT}'.",
        details={"engine": name},
    )
