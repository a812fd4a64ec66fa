"""
Tests for the OCR engine wrappers and engine selection.

The real engines are never loaded; easyocr.Reader and the pytesseract entry
points are monkeypatched.
"""

from pathlib import Path
from types import SimpleNamespace

import pytest
import pytesseract

from textsnip.core import ocr_engine
from textsnip.core.errors import ConfigurationError, OcrEngineError
from textsnip.core.ocr_engine import EasyOcrEngine, TesseractEngine, create_engine


class FakeReader:
    instances = []

    def __init__(self, languages, **kwargs):
        self.languages = languages
        self.kwargs = kwargs
        self.calls = []
        FakeReader.instances.append(self)

    def readtext(self, path, **kwargs):
        self.calls.append((path, kwargs))
        return ["first line", "second line"]


@pytest.fixture
def fake_reader(monkeypatch):
    FakeReader.instances = []
    monkeypatch.setattr(ocr_engine.easyocr, "Reader", FakeReader)
    return FakeReader


@pytest.fixture
def fake_tesseract(monkeypatch):
    calls = []

    def image_to_string(image, lang=None, config=""):
        calls.append({"image": image, "lang": lang, "config": config})
        return "tesseract text\n"

    monkeypatch.setattr(ocr_engine.pytesseract, "get_tesseract_version", lambda: "5.3.0")
    monkeypatch.setattr(ocr_engine.pytesseract, "image_to_string", image_to_string)
    monkeypatch.setattr(pytesseract.pytesseract, "tesseract_cmd", "tesseract")
    return calls


def engine_config(**overrides):
    values = dict(
        ocr_engine="easyocr",
        easyocr_language="en",
        easyocr_model_dir=None,
        easyocr_gpu=False,
        easyocr_download_enabled=True,
        tesseract_language="eng",
        tesseract_tessdata_dir=None,
        tesseract_cmd=None,
    )
    values.update(overrides)
    return SimpleNamespace(**values)


# =============================================================================
# EasyOCR
# =============================================================================

class TestEasyOcrEngine:

    def test_reader_configured_for_one_language(self, fake_reader, tmp_path):
        EasyOcrEngine(language="de", model_dir=tmp_path / "models", gpu=False, download_enabled=False)

        (reader,) = fake_reader.instances
        assert reader.languages == ["de"]
        assert reader.kwargs["gpu"] is False
        assert reader.kwargs["download_enabled"] is False
        assert reader.kwargs["model_storage_directory"] == str(tmp_path / "models")
        assert (tmp_path / "models").is_dir()

    def test_read_file_joins_paragraphs(self, fake_reader):
        engine = EasyOcrEngine()
        text = engine.read_file(Path("/tmp/region.png"))

        assert text == "first line\nsecond line"
        path, kwargs = fake_reader.instances[0].calls[0]
        assert path == str(Path("/tmp/region.png"))
        assert kwargs == {"detail": 0, "paragraph": True}

    def test_init_failure_wrapped(self, monkeypatch):
        def broken_reader(*args, **kwargs):
            raise RuntimeError("model download failed")

        monkeypatch.setattr(ocr_engine.easyocr, "Reader", broken_reader)

        with pytest.raises(OcrEngineError) as exc_info:
            EasyOcrEngine()
        assert "model download failed" in exc_info.value.message
        assert isinstance(exc_info.value.inner_error, RuntimeError)

    def test_read_failure_wrapped(self, fake_reader):
        engine = EasyOcrEngine()

        def broken(*args, **kwargs):
            raise ValueError("bad image")

        engine.reader.readtext = broken
        with pytest.raises(OcrEngineError, match="bad image"):
            engine.read_file(Path("x.png"))


# =============================================================================
# Tesseract
# =============================================================================

class TestTesseractEngine:

    def test_missing_traineddata(self, fake_tesseract, tmp_path):
        with pytest.raises(OcrEngineError, match="Missing language data"):
            TesseractEngine(language="eng", tessdata_dir=tmp_path)

    def test_missing_executable(self, monkeypatch):
        def not_found():
            raise pytesseract.TesseractNotFoundError()

        monkeypatch.setattr(ocr_engine.pytesseract, "get_tesseract_version", not_found)

        with pytest.raises(OcrEngineError, match="not found"):
            TesseractEngine()

    def test_read_file_passes_language_and_tessdata(self, fake_tesseract, tmp_path):
        (tmp_path / "eng.traineddata").write_bytes(b"")
        engine = TesseractEngine(language="eng", tessdata_dir=tmp_path)

        text = engine.read_file(Path("region.png"))

        assert text == "tesseract text\n"
        (call,) = fake_tesseract
        assert call["lang"] == "eng"
        assert f'--tessdata-dir "{tmp_path}"' in call["config"]
        assert "--oem 3" in call["config"]

    def test_default_tessdata_not_checked(self, fake_tesseract):
        engine = TesseractEngine(language="eng")
        assert engine.tesseract_config == "--oem 3"

    def test_custom_command(self, fake_tesseract):
        TesseractEngine(tesseract_cmd="/opt/tesseract/bin/tesseract")
        assert pytesseract.pytesseract.tesseract_cmd == "/opt/tesseract/bin/tesseract"

    def test_read_failure_wrapped(self, fake_tesseract, monkeypatch):
        engine = TesseractEngine()

        def failing(*args, **kwargs):
            raise pytesseract.TesseractError(1, "Error opening data file")

        monkeypatch.setattr(ocr_engine.pytesseract, "image_to_string", failing)
        with pytest.raises(OcrEngineError, match="Tesseract could not process"):
            engine.read_file(Path("region.png"))


# =============================================================================
# Engine selection
# =============================================================================

class TestCreateEngine:

    def test_easyocr_selected(self, fake_reader):
        engine = create_engine(engine_config(ocr_engine="easyocr", easyocr_language="fr"))
        assert isinstance(engine, EasyOcrEngine)
        assert engine.language == "fr"

    def test_tesseract_selected(self, fake_tesseract):
        engine = create_engine(engine_config(ocr_engine="tesseract", tesseract_language="eng"))
        assert isinstance(engine, TesseractEngine)

    def test_unknown_engine(self):
        with pytest.raises(ConfigurationError) as exc_info:
            create_engine(engine_config(ocr_engine="abbyy"))
        assert exc_info.value.details == {"engine": "abbyy"}
        assert exc_info.value.title == "Configuration Error"
