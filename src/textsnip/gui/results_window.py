# -*- coding: utf-8 -*-
"""
src/textsnip/gui/results_window.py

Defines the ResultDialog that shows recognized text.

A small, modal, always-on-top dialog with the text in a read-only box and a
button that copies it to the clipboard.
"""

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import QDialog, QHBoxLayout, QMessageBox, QPushButton, QTextEdit, QVBoxLayout, QWidget

from ..utils.clipboard_manager import copy_to_clipboard

WINDOW_TITLE = "OCR Result"
WINDOW_WIDTH = 484
WINDOW_HEIGHT = 271


class ResultDialog(QDialog):
    """Shows OCR output with Copy and Close buttons."""

    def __init__(self, text: str, parent: QWidget = None):
        """
        Args:
            text (str): The recognized text, shown verbatim.
            parent (QWidget, optional): The parent widget. Defaults to None.
        """
        super().__init__(parent)
        self.text = text

        self.setWindowTitle(WINDOW_TITLE)
        self.setWindowFlags(self.windowFlags() | Qt.WindowType.WindowStaysOnTopHint)
        self.resize(WINDOW_WIDTH, WINDOW_HEIGHT)
        self._setup_ui()

    def _setup_ui(self):
        layout = QVBoxLayout(self)
        layout.setContentsMargins(12, 12, 12, 12)

        self.text_box = QTextEdit()
        self.text_box.setReadOnly(True)
        self.text_box.setPlainText(self.text)
        self.text_box.selectAll()
        layout.addWidget(self.text_box)

        buttons = QHBoxLayout()
        buttons.addStretch()

        self.copy_button = QPushButton("Copy")
        self.copy_button.setDefault(True)
        self.copy_button.clicked.connect(self.copy_text)
        buttons.addWidget(self.copy_button)

        self.close_button = QPushButton("Close")
        self.close_button.clicked.connect(self.accept)
        buttons.addWidget(self.close_button)

        layout.addLayout(buttons)

    def copy_text(self):
        """Copies the full text and confirms."""
        if copy_to_clipboard(self.text):
            QMessageBox.information(self, "Success", "Text copied to clipboard!")
        else:
            QMessageBox.warning(self, "Clipboard Unavailable",
                                "Could not copy to the clipboard. Select the text and copy it manually.")
