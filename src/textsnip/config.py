# -*- coding: utf-8 -*-
"""
src/textsnip/config.py

Module for handling application configuration.

This module defines default settings for TextSnip, such as which OCR engine
to use, where its language data lives and how small a selection may be. It
loads user-defined settings from a configuration file (config.ini), creating
one with default values on the first run.
"""

import configparser
import logging
import platform
from pathlib import Path
from typing import Optional

# --- Constants ---
APP_NAME = "TextSnip"
DEFAULT_CONFIG_FILENAME = "config.ini"
DEFAULT_ENGINE = "easyocr"
DEFAULT_EASYOCR_LANGUAGE = "en"
DEFAULT_TESSERACT_LANGUAGE = "eng"
DEFAULT_TESSDATA_DIR = "./tessdata"
DEFAULT_MIN_SELECTION_SIZE = 10
DEFAULT_OVERLAY_OPACITY = 0.3

logger = logging.getLogger(__name__)


def get_app_dir() -> Path:
    """
    Gets the application's data directory in a cross-platform way.

    This directory is used to store the configuration file, the logs and
    the downloaded OCR models.

    - Windows: %APPDATA%/TextSnip
    - macOS: ~/Library/Application Support/TextSnip
    - Linux: ~/.config/TextSnip

    Returns:
        Path: A Path object to the application's data directory.
    """
    if platform.system() == "Windows":
        app_dir = Path.home() / "AppData" / "Roaming" / APP_NAME
    elif platform.system() == "Darwin":  # macOS
        app_dir = Path.home() / "Library" / "Application Support" / APP_NAME
    else:  # Linux and other Unix-like
        app_dir = Path.home() / ".config" / APP_NAME

    app_dir.mkdir(parents=True, exist_ok=True)
    return app_dir


def _optional_path(value: str) -> Optional[Path]:
    value = value.strip()
    return Path(value).expanduser() if value else None


class Config:
    """
    Manages application configuration by loading defaults and overriding
    them with settings from a user-specific config file.
    """

    def __init__(self, app_dir: Optional[Path] = None):
        """
        Initializes the configuration manager.

        Args:
            app_dir (Path, optional): Directory holding config.ini. Defaults
                to the per-user application directory.
        """
        self.parser = configparser.ConfigParser()
        self.app_dir = Path(app_dir) if app_dir is not None else get_app_dir()
        self.app_dir.mkdir(parents=True, exist_ok=True)
        self.config_file_path = self.app_dir / DEFAULT_CONFIG_FILENAME

        self._load_defaults()
        self._load_from_file()

    def _load_defaults(self):
        """Sets the default configuration values in the parser object."""
        self.parser["General"] = {
            "hotkey_enabled": "True",
            "log_level": "INFO",
        }
        self.parser["OCR"] = {
            "engine": DEFAULT_ENGINE,
            "temp_dir": "",
        }
        self.parser["EasyOCR"] = {
            "language": DEFAULT_EASYOCR_LANGUAGE,
            "model_dir": "",
            "gpu": "False",
            "download_enabled": "True",
        }
        self.parser["Tesseract"] = {
            "language": DEFAULT_TESSERACT_LANGUAGE,
            "tessdata_dir": DEFAULT_TESSDATA_DIR,
            "tesseract_cmd": "",
        }
        self.parser["Selection"] = {
            "min_size": str(DEFAULT_MIN_SELECTION_SIZE),
            "overlay_opacity": str(DEFAULT_OVERLAY_OPACITY),
        }

    def _load_from_file(self):
        """
        Loads settings from the config.ini file, overriding defaults.
        If the file doesn't exist, it will be created with default values.
        """
        if not self.config_file_path.exists():
            self._save_defaults()
        else:
            self.parser.read(self.config_file_path, encoding="utf-8")

    def _save_defaults(self):
        """Saves the current (default) configuration to the config file."""
        try:
            with open(self.config_file_path, 'w', encoding="utf-8") as configfile:
                configfile.write(f"# {APP_NAME} Configuration File\n")
                configfile.write("# You can edit these values. Restart the app for changes to take effect.\n\n")
                self.parser.write(configfile)
        except OSError as e:
            # Not fatal: the defaults are already loaded in memory.
            logger.error(f"Could not write to config file at {self.config_file_path}: {e}")

    # --- Properties to access settings easily and with correct types ---

    @property
    def hotkey_enabled(self) -> bool:
        """Whether the global capture hotkey is registered."""
        return self.parser.getboolean("General", "hotkey_enabled", fallback=True)

    @property
    def log_level(self) -> int:
        """The root logging level, as a `logging` constant."""
        name = self.parser.get("General", "log_level", fallback="INFO").strip().upper()
        level = logging.getLevelName(name)
        return level if isinstance(level, int) else logging.INFO

    @property
    def log_dir(self) -> Path:
        return self.app_dir / "logs"

    @property
    def ocr_engine(self) -> str:
        """Which OCR engine to use: 'easyocr' or 'tesseract'."""
        return self.parser.get("OCR", "engine", fallback=DEFAULT_ENGINE).strip().lower()

    @property
    def temp_dir(self) -> Optional[Path]:
        """Where transient images are written. None means the system temp dir."""
        return _optional_path(self.parser.get("OCR", "temp_dir", fallback=""))

    @property
    def easyocr_language(self) -> str:
        return self.parser.get("EasyOCR", "language", fallback=DEFAULT_EASYOCR_LANGUAGE).strip()

    @property
    def easyocr_model_dir(self) -> Path:
        """The EasyOCR model storage directory."""
        return _optional_path(self.parser.get("EasyOCR", "model_dir", fallback="")) or self.app_dir / "models"

    @property
    def easyocr_gpu(self) -> bool:
        return self.parser.getboolean("EasyOCR", "gpu", fallback=False)

    @property
    def easyocr_download_enabled(self) -> bool:
        """Whether EasyOCR may download missing models on first use."""
        return self.parser.getboolean("EasyOCR", "download_enabled", fallback=True)

    @property
    def tesseract_language(self) -> str:
        return self.parser.get("Tesseract", "language", fallback=DEFAULT_TESSERACT_LANGUAGE).strip()

    @property
    def tesseract_tessdata_dir(self) -> Optional[Path]:
        """Directory holding the '.traineddata' files."""
        return _optional_path(self.parser.get("Tesseract", "tessdata_dir", fallback=DEFAULT_TESSDATA_DIR))

    @property
    def tesseract_cmd(self) -> Optional[str]:
        return self.parser.get("Tesseract", "tesseract_cmd", fallback="").strip() or None

    @property
    def min_selection_size(self) -> int:
        """Selections must be strictly larger than this in both dimensions."""
        return max(0, self.parser.getint("Selection", "min_size", fallback=DEFAULT_MIN_SELECTION_SIZE))

    @property
    def overlay_opacity(self) -> float:
        """Opacity (0-1) of the dark fill drawn over the screen while selecting."""
        opacity = self.parser.getfloat("Selection", "overlay_opacity", fallback=DEFAULT_OVERLAY_OPACITY)
        return min(max(opacity, 0.0), 1.0)


# --- Process-wide instance ---
# Created on first use rather than at import so that importing this module
# never touches the user's home directory.
_config: Optional[Config] = None


def get_config() -> Config:
    global _config
    if _config is None:
        _config = Config()
    return _config
