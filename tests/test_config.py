"""
Tests for config.ini handling and logging setup.
"""

import logging
from pathlib import Path

import pytest

from textsnip import config as config_module
from textsnip.config import Config
from textsnip.utils import logging_config


def write_config(app_dir, body):
    (app_dir / "config.ini").write_text(body, encoding="utf-8")
    return Config(app_dir=app_dir)


class TestDefaults:

    def test_creates_file_on_first_run(self, tmp_path):
        cfg = Config(app_dir=tmp_path)

        assert cfg.config_file_path == tmp_path / "config.ini"
        text = cfg.config_file_path.read_text(encoding="utf-8")
        assert text.startswith("# TextSnip Configuration File")
        assert "[OCR]" in text

    def test_default_values(self, tmp_path):
        cfg = Config(app_dir=tmp_path)

        assert cfg.hotkey_enabled is True
        assert cfg.log_level == logging.INFO
        assert cfg.log_dir == tmp_path / "logs"
        assert cfg.ocr_engine == "easyocr"
        assert cfg.temp_dir is None
        assert cfg.easyocr_language == "en"
        assert cfg.easyocr_model_dir == tmp_path / "models"
        assert cfg.easyocr_gpu is False
        assert cfg.easyocr_download_enabled is True
        assert cfg.tesseract_language == "eng"
        assert cfg.tesseract_tessdata_dir == Path("./tessdata")
        assert cfg.tesseract_cmd is None
        assert cfg.min_selection_size == 10
        assert cfg.overlay_opacity == pytest.approx(0.3)

    def test_defaults_round_trip_through_file(self, tmp_path):
        Config(app_dir=tmp_path)
        reloaded = Config(app_dir=tmp_path)
        assert reloaded.ocr_engine == "easyocr"
        assert reloaded.min_selection_size == 10


class TestOverrides:

    def test_engine_and_languages(self, tmp_path):
        cfg = write_config(tmp_path, (
            "[OCR]\nengine = Tesseract\n"
            "[Tesseract]\nlanguage = deu\ntessdata_dir = /opt/tessdata\ntesseract_cmd = /usr/bin/tesseract\n"
            "[EasyOCR]\nlanguage = ja\ngpu = yes\ndownload_enabled = no\n"
        ))

        assert cfg.ocr_engine == "tesseract"
        assert cfg.tesseract_language == "deu"
        assert cfg.tesseract_tessdata_dir == Path("/opt/tessdata")
        assert cfg.tesseract_cmd == "/usr/bin/tesseract"
        assert cfg.easyocr_language == "ja"
        assert cfg.easyocr_gpu is True
        assert cfg.easyocr_download_enabled is False

    def test_partial_file_keeps_other_defaults(self, tmp_path):
        cfg = write_config(tmp_path, "[Selection]\nmin_size = 4\n")

        assert cfg.min_selection_size == 4
        assert cfg.ocr_engine == "easyocr"
        assert cfg.hotkey_enabled is True

    def test_empty_tessdata_dir_means_engine_default(self, tmp_path):
        cfg = write_config(tmp_path, "[Tesseract]\ntessdata_dir =\n")
        assert cfg.tesseract_tessdata_dir is None

    def test_temp_dir(self, tmp_path):
        cfg = write_config(tmp_path, f"[OCR]\ntemp_dir = {tmp_path / 'scratch'}\n")
        assert cfg.temp_dir == tmp_path / "scratch"

    def test_hotkey_disabled(self, tmp_path):
        cfg = write_config(tmp_path, "[General]\nhotkey_enabled = false\nlog_level = debug\n")
        assert cfg.hotkey_enabled is False
        assert cfg.log_level == logging.DEBUG

    @pytest.mark.parametrize("body, expected", [
        ("[Selection]\nmin_size = -3\n", 0),
        ("[Selection]\nmin_size = 25\n", 25),
    ])
    def test_min_size_never_negative(self, tmp_path, body, expected):
        assert write_config(tmp_path, body).min_selection_size == expected

    @pytest.mark.parametrize("value, expected", [("1.5", 1.0), ("-0.2", 0.0), ("0.55", 0.55)])
    def test_opacity_clamped(self, tmp_path, value, expected):
        cfg = write_config(tmp_path, f"[Selection]\noverlay_opacity = {value}\n")
        assert cfg.overlay_opacity == pytest.approx(expected)

    def test_unknown_log_level_falls_back(self, tmp_path):
        cfg = write_config(tmp_path, "[General]\nlog_level = LOUD\n")
        assert cfg.log_level == logging.INFO


class TestGetConfig:

    def test_instance_is_shared(self, tmp_path, monkeypatch):
        monkeypatch.setattr(config_module, "get_app_dir", lambda: tmp_path)
        monkeypatch.setattr(config_module, "_config", None)

        first = config_module.get_config()
        assert config_module.get_config() is first
        assert first.app_dir == tmp_path


class TestLoggingSetup:

    @pytest.fixture
    def clean_root_logger(self, monkeypatch):
        root = logging.getLogger()
        saved_handlers = list(root.handlers)
        saved_level = root.level
        monkeypatch.setattr(logging_config, "_logging_configured", False)
        yield root
        for handler in root.handlers:
            if handler not in saved_handlers:
                handler.close()
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)

    def test_file_handler_created(self, tmp_path, clean_root_logger):
        logging_config.setup_logging(logging.WARNING, tmp_path / "logs")

        assert (tmp_path / "logs" / logging_config.LOG_FILENAME).exists()
        levels = sorted(handler.level for handler in clean_root_logger.handlers)
        assert levels == [logging.DEBUG, logging.WARNING]

    def test_second_call_is_noop(self, tmp_path, clean_root_logger):
        logging_config.setup_logging(logging.INFO)
        count = len(clean_root_logger.handlers)
        logging_config.setup_logging(logging.INFO, tmp_path / "logs")

        assert len(clean_root_logger.handlers) == count
        assert not (tmp_path / "logs").exists()
