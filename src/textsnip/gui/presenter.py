# -*- coding: utf-8 -*-
"""
src/textsnip/gui/presenter.py

Qt implementation of the presenter: message boxes and the result dialog.
"""

import logging

from PyQt6.QtWidgets import QMessageBox

from ..core.presentation import NO_TEXT_MESSAGE, Presenter
from .results_window import WINDOW_TITLE, ResultDialog

logger = logging.getLogger(__name__)


class QtPresenter(Presenter):

    def show_text(self, text: str) -> None:
        dialog = ResultDialog(text)
        dialog.exec()

    def show_no_text(self) -> None:
        logger.info("No text found in the selection.")
        QMessageBox.information(None, WINDOW_TITLE, NO_TEXT_MESSAGE)

    def show_error(self, title: str, message: str) -> None:
        QMessageBox.critical(None, title, f"{title}: {message}")
