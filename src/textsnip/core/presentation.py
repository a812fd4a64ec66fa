# -*- coding: utf-8 -*-
"""
src/textsnip/core/presentation.py

The contract the orchestrator relies on to show results to the user.
"""

from abc import ABC, abstractmethod

from .errors import TextSnipError

NO_TEXT_MESSAGE = "No text found in the selected area."


def is_blank(text: str) -> bool:
    return not text or text.isspace()


class Presenter(ABC):
    """
    Routes pipeline outcomes to the right notice.

    Subclasses only provide the three concrete notices; the choice between
    them is made here so every front end treats blank text the same way.
    """

    def present(self, text: str) -> None:
        if is_blank(text):
            self.show_no_text()
        else:
            self.show_text(text)

    def present_error(self, error: TextSnipError) -> None:
        self.show_error(error.title, error.message)

    @abstractmethod
    def show_text(self, text: str) -> None:
        """Shows recognized text with a way to copy it."""

    @abstractmethod
    def show_no_text(self) -> None:
        """Informational notice: the engine ran but found nothing."""

    @abstractmethod
    def show_error(self, title: str, message: str) -> None:
        """Blocking error notice."""
